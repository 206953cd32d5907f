"""Module id and path naming for bowl-build."""

from naming.ids import convert_path, is_opaque, to_module_id, to_module_path

__all__ = ["convert_path", "is_opaque", "to_module_id", "to_module_path"]
