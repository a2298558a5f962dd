from dataclasses import dataclass, field
from typing import List, Union


@dataclass(frozen=True)
class Span:
    line: int
    col: int


@dataclass
class Atom:
    kind: str  # 'ID' or 'NUMBER'
    value: Union[str, int, float]
    span: Span

    @property
    def is_identifier(self) -> bool:
        return self.kind == 'ID'


@dataclass
class SList:
    items: List["Expr"]
    span: Span

    @property
    def head(self) -> str:
        """Name of the called procedure (the parser guarantees an identifier head)."""
        return self.items[0].value

    @property
    def args(self) -> List["Expr"]:
        return self.items[1:]

    @property
    def is_setq(self) -> bool:
        return bool(self.items) and isinstance(self.items[0], Atom) and self.items[0].value == 'setq'


Expr = Union[Atom, SList]


@dataclass
class Program:
    forms: List[Expr] = field(default_factory=list)

    @property
    def visible_forms(self) -> List[Expr]:
        """Top-level forms that contribute a value to the rendered diagram."""
        return [form for form in self.forms if not (isinstance(form, SList) and form.is_setq)]
