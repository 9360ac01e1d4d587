"""Custom SQLAlchemy types for cross-database compatibility."""

from sqlalchemy import BigInteger, Integer, String, TypeDecorator
from sqlalchemy.dialects.postgresql import CITEXT as PostgresCITEXT


class CITEXT(TypeDecorator):
    """Case-insensitive text column.

    Email addresses are stored as PostgreSQL ``CITEXT`` so that uniqueness and
    lookups ignore case. Other dialects (SQLite in tests) fall back to a plain
    ``VARCHAR`` of the given length and compare exactly.
    """

    impl = String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PostgresCITEXT())
        return dialect.type_descriptor(String(self.impl.length))


# BIGINT ids; SQLite only autoincrements an INTEGER PRIMARY KEY
BigIntegerID = BigInteger().with_variant(Integer, "sqlite")
