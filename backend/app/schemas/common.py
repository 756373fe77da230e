"""
Briques de validation partagées par tous les schémas.

- Coercitions tolérantes pour les formulaires : dates en texte libre,
  nombres saisis comme chaînes, chaînes vides → null.
- ApiModel : base camelCase sur le fil (schoolId, totalCount), snake_case en Python.
- Page / ListParams : enveloppe et paramètres de pagination communs.
"""

import datetime as dt
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from math import ceil
from typing import Annotated, Any, Generic, List, Optional, TypeVar

from fastapi import Query
from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

DATE_FORMATS = ("%Y-%m-%d", "%d-%m-%Y", "%d/%m/%Y", "%Y/%m/%d")
INT_REGEX = re.compile(r"^[+-]?\d+$")
# Montants stockés en Numeric(10, 2)
MAX_AMOUNT = Decimal("100000000")


def parse_date(value: Any) -> Optional[dt.date]:
    """Convertit une date saisie librement en date, ou None si vide."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        for fmt in DATE_FORMATS:
            try:
                return dt.datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    raise ValueError("Invalid date")


def parse_int(value: Any) -> Optional[int]:
    """Convertit un nombre entier (ou une chaîne numérique) en int, ou None si vide."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("Expected a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if INT_REGEX.match(text):
            return int(text)
    raise ValueError("Expected a whole number")


def parse_decimal(value: Any) -> Optional[Decimal]:
    """Convertit un montant en Decimal arrondi au centime, ou None si vide."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("Expected an amount")
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValueError("Expected an amount")
    if not amount.is_finite():
        raise ValueError("Expected an amount")
    if abs(amount) >= MAX_AMOUNT:
        raise ValueError("Amount is too large")
    try:
        amount = amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ValueError("Expected an amount")
    if abs(amount) >= MAX_AMOUNT:
        raise ValueError("Amount is too large")
    return amount


def not_blank(value: Optional[str]) -> Optional[str]:
    """Refuse une chaîne vide ou composée d'espaces ; None est laissé tel quel."""
    if value is None:
        return None
    if not value.strip():
        raise ValueError("Field cannot be empty")
    return value.strip()


def empty_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Champs obligatoires : la coercition s'applique, une valeur vide reste une erreur
DateField = Annotated[dt.date, BeforeValidator(parse_date)]
IntField = Annotated[int, BeforeValidator(parse_int)]
MoneyField = Annotated[Decimal, BeforeValidator(parse_decimal)]

# Champs optionnels : une valeur vide devient null
OptionalDate = Annotated[Optional[dt.date], BeforeValidator(parse_date)]
OptionalInt = Annotated[Optional[int], BeforeValidator(parse_int)]
OptionalMoney = Annotated[Optional[Decimal], BeforeValidator(parse_decimal)]
OptionalStr = Annotated[Optional[str], BeforeValidator(empty_to_none)]


class ApiModel(BaseModel):
    """Base des schémas du fil : alias camelCase, lecture depuis les objets ORM."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


T = TypeVar("T")

# Caractère d'échappement des motifs LIKE de recherche
LIKE_ESCAPE = "\\"


class Page(ApiModel, Generic[T]):
    """Enveloppe de liste paginée."""
    items: List[T]
    total_count: int
    current_page: int
    total_pages: int


@dataclass
class ListParams:
    search: Optional[str] = None
    status: Optional[str] = None
    page: int = 1
    limit: int = 10
    school_id: Optional[int] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def search_pattern(self) -> Optional[str]:
        """Motif LIKE insensible à la casse ; % et _ saisis sont pris littéralement."""
        if not self.search:
            return None
        term = self.search.strip().lower()
        for char in (LIKE_ESCAPE, "%", "_"):
            term = term.replace(char, LIKE_ESCAPE + char)
        return f"%{term}%"

    def page_of(self, items: list, total: int) -> dict:
        return {
            "items": items,
            "total_count": total,
            "current_page": self.page,
            "total_pages": ceil(total / self.limit) if total else 0,
        }


def list_params(
    search: Optional[str] = Query(None, description="Recherche sur les colonnes de type nom"),
    status: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    school_id: Optional[int] = Query(None, alias="schoolId", description="Filtre école (superadmin)"),
) -> ListParams:
    """Dépendance FastAPI : paramètres de liste communs à toutes les collections."""
    if status == "all":
        status = None
    if search is not None and not search.strip():
        search = None
    return ListParams(search=search, status=status, page=page, limit=limit, school_id=school_id)
