"""Statement validation against a schema snapshot."""
from sqltree.validate.schema_validator import SchemaValidator

__all__ = ["SchemaValidator"]
