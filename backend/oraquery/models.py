"""
Query models.

Entities: ParameterDescriptor, QueryOptions, OracleCredentials, QueryRequest,
plus the small value types passed between the SQL engine stages
(BindValue, OutputItem).

Host payloads use the workflow field names (datatype, parseInStatement,
includeMetadata, rowLimit, connectionString, thinMode); they are accepted as
aliases next to the snake_case names.
"""

import re
from enum import Enum
from typing import Any, NamedTuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Unquoted Oracle identifier: letter first, then letters, digits, _ $ #
BIND_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_$#]*$")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class DataTypeEnum(str, Enum):
    """Declared type of a bind parameter (string, number)."""

    STRING = "string"
    NUMBER = "number"


# ---------------------------------------------------------------------------
# Engine value types
# ---------------------------------------------------------------------------


class BindValue(NamedTuple):
    """A coerced bind: NUMBER carries int | float, STRING carries str."""

    type: DataTypeEnum
    value: int | float | str


class OutputItem(NamedTuple):
    """One output record handed back to the host."""

    json: dict[str, Any]


# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------


class ParameterDescriptor(BaseModel):
    """One named parameter: value, declared type and IN-list expansion flag."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=128)
    value: str | int | float = ""
    data_type: DataTypeEnum = Field(
        default=DataTypeEnum.STRING,
        validation_alias=AliasChoices("data_type", "datatype", "dataType"),
    )
    expand_as_list: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "expand_as_list", "parseInStatement", "expandAsList"
        ),
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_placeholder_prefix(cls, v: Any) -> Any:
        # Users often type ":param" although the SQL carries the colon.
        if isinstance(v, str):
            v = v.strip()
            if v.startswith(":"):
                v = v[1:]
        return v

    @field_validator("name")
    @classmethod
    def name_is_identifier(cls, v: str) -> str:
        if not BIND_NAME_PATTERN.match(v):
            raise ValueError(
                f"invalid bind name {v!r}: must start with a letter and contain "
                "only letters, digits, '_', '$' or '#'"
            )
        return v


class QueryOptions(BaseModel):
    """Result shaping options: metadata envelope and row cap (0 = no limit)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    include_metadata: bool = Field(
        default=False,
        validation_alias=AliasChoices("include_metadata", "includeMetadata"),
    )
    row_limit: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("row_limit", "rowLimit"),
    )


class OracleCredentials(BaseModel):
    """Login for one Oracle database; opaque to the SQL engine."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user: str = Field(default="system", max_length=128)
    password: str = Field(default="", max_length=512, repr=False)
    connection_string: str = Field(
        default="localhost/orcl",
        validation_alias=AliasChoices("connection_string", "connectionString"),
    )
    thin_mode: bool = Field(
        default=True,
        validation_alias=AliasChoices("thin_mode", "thinMode"),
        description="True = pure Python driver; False = Oracle Client libraries (thick).",
    )


class QueryRequest(BaseModel):
    """Body for POST /query."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., min_length=1)
    params: list[ParameterDescriptor] = Field(default_factory=list)
    include_metadata: bool = Field(
        default=False,
        validation_alias=AliasChoices("include_metadata", "includeMetadata"),
    )
    row_limit: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("row_limit", "rowLimit"),
    )

    @property
    def options(self) -> QueryOptions:
        return QueryOptions(
            include_metadata=self.include_metadata, row_limit=self.row_limit
        )
