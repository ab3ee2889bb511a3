from versekeep.models.kv import KeyValue

__all__ = ["KeyValue"]
