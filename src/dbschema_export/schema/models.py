"""
Schema Model

Dialect-neutral representation of tables, columns, indexes and foreign keys
as returned by a schema reader.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Column:
    """Column metadata as reported by the database."""
    name: str
    type: str  # generic native type: int, varchar, enum, USER-DEFINED...
    nullable: bool = True
    primary: bool = False
    auto_increment: bool = False
    default: Optional[str] = None

    # Dialect-specific detail
    column_type: Optional[str] = None  # MySQL: "int(10) unsigned", "enum('a','b')"
    udt_name: Optional[str] = None     # PostgreSQL: int4, jsonb, _text
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    enum_values: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = {
            'name': self.name,
            'type': self.type,
            'nullable': self.nullable,
            'primary': self.primary,
            'auto_increment': self.auto_increment,
            'default': self.default,
            'length': self.length,
            'precision': self.precision,
            'scale': self.scale,
        }
        if self.column_type is not None:
            data['columnType'] = self.column_type
        if self.udt_name is not None:
            data['udt_name'] = self.udt_name
        if self.enum_values is not None:
            data['enumValues'] = list(self.enum_values)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Column':
        """Create a column from its dictionary form."""
        enum_values = data.get('enumValues')
        return cls(
            name=data['name'],
            type=data.get('type', ''),
            nullable=data.get('nullable', True),
            primary=data.get('primary', False),
            auto_increment=data.get('auto_increment', False),
            default=data.get('default'),
            column_type=data.get('columnType'),
            udt_name=data.get('udt_name'),
            length=data.get('length'),
            precision=data.get('precision'),
            scale=data.get('scale'),
            enum_values=list(enum_values) if enum_values is not None else None,
        )


@dataclass(frozen=True)
class Index:
    """Index over one or more columns."""
    name: str
    columns: List[str] = field(default_factory=list)
    unique: bool = False
    primary: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'columns': list(self.columns),
            'unique': self.unique,
            'primary': self.primary,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Index':
        """Create an index from its dictionary form."""
        return cls(
            name=data['name'],
            columns=list(data.get('columns', [])),
            unique=data.get('unique', False),
            primary=data.get('primary', False),
        )


@dataclass(frozen=True)
class ForeignKey:
    """Single-column foreign key constraint."""
    constraint_col: str
    ref_container: str
    ref_column: str
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = {
            'constraintCol': self.constraint_col,
            'refContainer': self.ref_container,
            'refColumn': self.ref_column,
        }
        if self.on_delete is not None:
            data['onDelete'] = self.on_delete
        if self.on_update is not None:
            data['onUpdate'] = self.on_update
        if self.name is not None:
            data['name'] = self.name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ForeignKey':
        """Create a foreign key from its dictionary form."""
        return cls(
            constraint_col=data['constraintCol'],
            ref_container=data['refContainer'],
            ref_column=data['refColumn'],
            on_delete=data.get('onDelete'),
            on_update=data.get('onUpdate'),
            name=data.get('name'),
        )


@dataclass(frozen=True)
class Table:
    """Table definition: columns in natural order, indexes and foreign keys."""
    name: str
    columns: List[Column] = field(default_factory=list)
    indexes: List[Index] = field(default_factory=list)
    foreign_keys: List[ForeignKey] = field(default_factory=list)

    def __post_init__(self):
        seen = set()
        for column in self.columns:
            if column.name in seen:
                raise ValueError(f"Duplicate column '{column.name}' in table '{self.name}'")
            seen.add(column.name)

    @property
    def primary_key_columns(self) -> List[Column]:
        """Primary key columns in column order."""
        return [c for c in self.columns if c.primary]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (without the table name)."""
        return {
            'columns': [c.to_dict() for c in self.columns],
            'indexes': [i.to_dict() for i in self.indexes],
            'foreignKeys': [fk.to_dict() for fk in self.foreign_keys],
        }

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> 'Table':
        """Create a table from its dictionary form."""
        return cls(
            name=name,
            columns=[Column.from_dict(c) for c in data.get('columns') or []],
            indexes=[Index.from_dict(i) for i in data.get('indexes') or []],
            foreign_keys=[ForeignKey.from_dict(fk) for fk in data.get('foreignKeys') or []],
        )
