import firebase_admin
from firebase_admin import credentials, firestore


def init_firebase(project_id):
    if not firebase_admin._apps:
        # Credenciales por defecto: GOOGLE_APPLICATION_CREDENTIALS apunta a la
        # cuenta de servicio
        cred = credentials.ApplicationDefault()
        firebase_admin.initialize_app(cred, {"projectId": project_id})

    return firestore.client()
