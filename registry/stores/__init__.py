from django.conf import settings
from django.utils.module_loading import import_string

STORE_CLASSES = {
    "orm": "registry.stores.orm.OrmStore",
    "postgrest": "registry.stores.postgrest.PostgrestStore",
    "memory": "registry.stores.memory.MemoryStore",
}

_memory_store = None


def get_store(name=None):
    """
    The record store selected by ``REGISTRY_STORE``.

    The memory store is a process-wide singleton so that successive calls see
    the same tables.
    """
    global _memory_store

    name = name or settings.REGISTRY_STORE
    if name not in STORE_CLASSES:
        raise ValueError(f"Unknown record store: {name}")
    if name == "memory":
        if _memory_store is None:
            _memory_store = import_string(STORE_CLASSES[name])()
        return _memory_store
    return import_string(STORE_CLASSES[name])()


def reset_memory_store():
    global _memory_store
    _memory_store = None
