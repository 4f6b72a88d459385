"""Short names for operators and DDL keywords used when writing trees.

Usage::

    from sqltree.schema.vocabulary import and_, eq, gt, ph

    {"where": [and_, [eq, "status", ph], [gt, "age", 18]]}
"""

from __future__ import annotations

from sqltree.schema.placeholders import ph

# Comparison
eq = "="
ne = "<>"
lt = "<"
gt = ">"
lte = "<="
gte = ">="
like = "LIKE"
all_ = "*"

# Logical
and_ = "and"
or_ = "or"

# Arithmetic
add = "+"
sub = "-"
mul = "*"
div = "/"
mod = "%"
cat = "||"

# DDL column types
decimal = "decimal"
integer = "integer"
real = "real"
text = "text"
varchar = "varchar"

# DDL constraints and modifiers
check = "check"
composite = "composite"
default = "default"
foreign_key = "foreign key"
not_ = "not"
primary_key = "primary key"
references = "references"
unique = "unique"
if_exists = "if exists"
if_not_exists = "if not exists"

__all__ = [
    "eq", "ne", "lt", "gt", "lte", "gte", "like", "all_",
    "and_", "or_",
    "add", "sub", "mul", "div", "mod", "cat",
    "decimal", "integer", "real", "text", "varchar",
    "check", "composite", "default", "foreign_key", "not_", "primary_key",
    "references", "unique", "if_exists", "if_not_exists",
    "ph",
]
