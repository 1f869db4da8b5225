import json
import os
import sys
from pathlib import Path
from typing import NamedTuple

from firebase_admin_init import init_firebase

PROJECT_ENV_VARS = ("FIREBASE_PROJECT_ID", "GCLOUD_PROJECT")
CREDENTIALS_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"

DEFAULT_SEED_FILE = Path(__file__).resolve().parent / "data" / "firestore_seed.json"

SUCCESS_MESSAGE = "Firestore seed completed."


class SeedError(Exception):
    """Error fatal para el seed; main() lo imprime y sale con código 1."""


class ConfigError(SeedError):
    pass


class SeedFileNotFoundError(SeedError):
    pass


class SeedParseError(SeedError):
    pass


class SeedWriteError(SeedError):
    def __init__(self, collection, doc_id, cause):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Failed to write {collection}/{doc_id}: {cause}")


class SeedConfig(NamedTuple):
    project_id: str
    credentials_path: str


def read_config(environ=None):
    env = os.environ if environ is None else environ

    project_id = next((env[name] for name in PROJECT_ENV_VARS if env.get(name)), None)
    if not project_id:
        raise ConfigError("Missing FIREBASE_PROJECT_ID or GCLOUD_PROJECT env var.")

    credentials_path = env.get(CREDENTIALS_ENV_VAR)
    if not credentials_path:
        raise ConfigError("Missing GOOGLE_APPLICATION_CREDENTIALS for a service account.")

    return SeedConfig(project_id, credentials_path)


def resolve_seed_path(arg=None):
    path = Path(arg).resolve() if arg else DEFAULT_SEED_FILE
    if not path.is_file():
        raise SeedFileNotFoundError(f"Seed file not found: {path}")
    return path


def _reject_constant(name):
    # NaN e Infinity no son JSON válido
    raise ValueError(f"Invalid JSON constant: {name}")


def load_seed(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f, parse_constant=_reject_constant)
    except ValueError as exc:
        raise SeedParseError(f"Invalid JSON in {path}: {exc}") from exc


def upsert_collection(db, name, docs):
    written = 0
    for doc_id, data in docs.items():
        try:
            # merge=False: reemplaza el documento completo
            db.collection(name).document(doc_id).set(data, merge=False)
        except Exception as exc:
            raise SeedWriteError(name, doc_id, exc) from exc
        written += 1
    return written


def seed(db, data):
    """Escribe cada colección del seed, en orden; ignora las que no son objetos."""
    counts = {}
    if not isinstance(data, dict):
        return counts

    for col_name, docs in data.items():
        if isinstance(docs, dict):
            counts[col_name] = upsert_collection(db, col_name, docs)
    return counts


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) > 1:
        print("Usage: seed_firestore.py [seed.json]", file=sys.stderr)
        return 1

    try:
        config = read_config()
        seed_path = resolve_seed_path(args[0] if args else None)
        data = load_seed(seed_path)

        db = init_firebase(config.project_id)
        seed(db, data)
    except SeedError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(SUCCESS_MESSAGE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
