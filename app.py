from __future__ import annotations

import logging

from dotenv import load_dotenv

from models.user import User
from persistence.datastore import Datastore
from persistence.disk_store import DiskJsonCollections
from persistence.interfaces import CollectionProvider
from persistence.memory_store import InMemoryCollections
from persistence import paths
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def register_entity_types(datastore: Datastore) -> None:
    datastore.register_entity_type(User, unique_fields=["emailAddress"], collection="users")


def create_datastore(settings: Settings | None = None) -> Datastore:
    if settings is None:
        load_dotenv("local.env")
        settings = get_settings()

    engine: CollectionProvider
    if settings.persist_to_disk:
        base = paths.ensure_dir(settings.data_dir) if settings.data_dir else paths.data_dir()
        engine = DiskJsonCollections(base)
        logger.info("Persisting collections under %s", engine.base_dir)
    else:
        engine = InMemoryCollections()
        logger.info("Using in-memory collections; nothing is written to disk")

    datastore = Datastore(engine, log_documents=settings.debug_log_documents)
    register_entity_types(datastore)
    return datastore
