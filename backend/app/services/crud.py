"""
Service CRUD générique pour les tables rattachées à une école.

Chaque fonction prend un Tenant obligatoire : les lectures sont filtrées par
school_id, les lignes d'une autre école sont traitées comme inexistantes.
Les services métier instancient (ou spécialisent) TenantCrud en déclarant :
- les colonnes de recherche et l'ordre de tri,
- les clés naturelles uniques (par école),
- les références à vérifier (même école),
- les tables dépendantes qui bloquent une suppression.
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Type

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.tenant import Tenant
from app.errors import Conflict, Forbidden, ValidationFailed
from app.models.school import School
from app.schemas.common import LIKE_ESCAPE, ListParams

logger = logging.getLogger(__name__)


def ensure_deletion_allowed(db: Session, tenant: Tenant) -> None:
    """Le drapeau allow_deletion de l'école s'impose à tous sauf au superadmin."""
    if tenant.is_global:
        return
    school = db.get(School, tenant.school_id)
    if school is not None and not school.allow_deletion:
        raise Forbidden("Deletion is disabled for this school")


class TenantCrud:
    def __init__(
        self,
        model: Type[Any],
        label: str,
        *,
        search_columns: Sequence[str] = (),
        order_by: Sequence[str] = ("id",),
        unique_fields: Optional[Mapping[str, str]] = None,
        references: Optional[Mapping[str, Tuple[Type[Any], str]]] = None,
        dependents: Iterable[Tuple[Type[Any], str, str]] = (),
    ):
        self.model = model
        self.label = label
        self.search_columns = tuple(search_columns)
        self.order_by = tuple(order_by)
        self.unique_fields = dict(unique_fields or {})
        self.references = dict(references or {})
        self.dependents = tuple(dependents)

    # --- Requêtes ---

    def _column(self, name: str):
        return getattr(self.model, name)

    def _ordering(self) -> list:
        ordering = []
        for name in self.order_by:
            if name.startswith("-"):
                ordering.append(self._column(name[1:]).desc())
            else:
                ordering.append(self._column(name))
        if "id" not in self.order_by:
            ordering.append(self.model.id)
        return ordering

    def base_query(self, tenant: Tenant, school_id: Optional[int] = None) -> Select:
        return tenant.apply(select(self.model), self.model, school_id)

    def filtered_query(self, tenant: Tenant, params: ListParams, *conditions: Any, **filters: Any) -> Select:
        stmt = self.base_query(tenant, params.school_id)
        if conditions:
            stmt = stmt.where(*conditions)
        pattern = params.search_pattern
        if pattern and self.search_columns:
            stmt = stmt.where(or_(*[
                func.lower(self._column(name)).like(pattern, escape=LIKE_ESCAPE)
                for name in self.search_columns
            ]))
        if params.status and hasattr(self.model, "status"):
            stmt = stmt.where(self.model.status == params.status)
        for name, value in filters.items():
            if value is not None:
                stmt = stmt.where(self._column(name) == value)
        return stmt

    def paginate(self, db: Session, tenant: Tenant, params: ListParams, *conditions: Any, **filters: Any) -> dict:
        """Liste paginée : {items, total_count, current_page, total_pages}."""
        stmt = self.filtered_query(tenant, params, *conditions, **filters)
        total = db.execute(
            select(func.count()).select_from(stmt.subquery())
        ).scalar() or 0
        rows = db.execute(
            stmt.order_by(*self._ordering()).offset(params.offset).limit(params.limit)
        ).scalars().all()
        return params.page_of(list(rows), total)

    def get(self, db: Session, tenant: Tenant, obj_id: int) -> Optional[Any]:
        """Retourne l'enregistrement, ou None s'il n'existe pas dans le périmètre de l'appelant."""
        obj = db.get(self.model, obj_id)
        if not tenant.owns(obj):
            return None
        return obj

    # --- Écritures ---

    def create(self, db: Session, tenant: Tenant, data: BaseModel, **extra: Any) -> Any:
        values = data.model_dump(exclude={"school_id"})
        values.update(extra)
        school_id = tenant.school_for_create(getattr(data, "school_id", None))
        if tenant.is_global and db.get(School, school_id) is None:
            raise ValidationFailed.field("schoolId", "School not found")

        self.check_references(db, school_id, values)
        self.ensure_unique(db, school_id, values)
        self.before_create(db, school_id, values)

        obj = self.model(school_id=school_id, **values)
        db.add(obj)
        self._commit(db)
        db.refresh(obj)
        logger.info("%s créé : id=%s, école=%s", self.label, obj.id, school_id)
        return obj

    def update(self, db: Session, tenant: Tenant, obj_id: int, data: BaseModel) -> Optional[Any]:
        """Met à jour les champs fournis. Retourne None si l'enregistrement est introuvable."""
        obj = self.get(db, tenant, obj_id)
        if obj is None:
            return None

        values = data.model_dump(exclude_unset=True, exclude={"school_id"})
        self.check_not_null(values)
        self.check_references(db, obj.school_id, values)

        changed_keys = {
            field: value for field, value in values.items()
            if field in self.unique_fields and value != getattr(obj, field)
        }
        self.ensure_unique(db, obj.school_id, changed_keys, exclude_id=obj.id)
        self.before_update(db, obj, values)

        for field, value in values.items():
            setattr(obj, field, value)

        self._commit(db)
        db.refresh(obj)
        return obj

    def delete(self, db: Session, tenant: Tenant, obj_id: int) -> bool:
        """
        Supprime définitivement un enregistrement.
        Refusé si des lignes dépendantes existent (pas de suppression en cascade).
        Retourne False si introuvable.
        """
        obj = self.get(db, tenant, obj_id)
        if obj is None:
            return False

        ensure_deletion_allowed(db, tenant)

        blocking = self.blocking_dependents(db, obj)
        if blocking:
            raise Conflict(
                f"{self.label} has dependent records and cannot be deleted "
                f"({', '.join(blocking)})"
            )

        school_id = obj.school_id
        self.before_delete(db, obj)
        db.delete(obj)
        self._commit(db)
        logger.info("%s supprimé : id=%s, école=%s", self.label, obj_id, school_id)
        return True

    # --- Règles ---

    def ensure_unique(
        self,
        db: Session,
        school_id: int,
        values: Mapping[str, Any],
        exclude_id: Optional[int] = None,
    ) -> None:
        """Vérifie l'unicité des clés naturelles au sein de l'école."""
        for field, field_label in self.unique_fields.items():
            value = values.get(field)
            if value is None:
                continue
            column = self._column(field)
            # Clés texte comparées sans la casse, comme à l'import CSV
            if isinstance(value, str):
                match = func.lower(column) == value.lower()
            else:
                match = column == value
            stmt = select(self.model.id).where(match, self.model.school_id == school_id)
            if exclude_id is not None:
                stmt = stmt.where(self.model.id != exclude_id)
            if db.execute(stmt.limit(1)).scalar() is not None:
                raise Conflict(f"{self.label} {field_label} already exists")

    def check_references(self, db: Session, school_id: int, values: Mapping[str, Any]) -> None:
        """Chaque clé étrangère fournie doit pointer vers une ligne de la même école."""
        errors = []
        for field, (ref_model, ref_label) in self.references.items():
            ref_id = values.get(field)
            if ref_id is None:
                continue
            ref = db.get(ref_model, ref_id)
            if ref is None or ref.school_id != school_id:
                errors.append({"path": to_camel(field), "message": f"{ref_label} not found"})
        if errors:
            raise ValidationFailed(errors)

    def check_not_null(self, values: Mapping[str, Any]) -> None:
        columns = self.model.__table__.columns
        errors = [
            {"path": to_camel(field), "message": "Field cannot be null"}
            for field, value in values.items()
            if value is None and field in columns and not columns[field].nullable
        ]
        if errors:
            raise ValidationFailed(errors)

    def blocking_dependents(self, db: Session, obj: Any) -> list[str]:
        blocking = []
        for dep_model, column, dep_label in self.dependents:
            exists = db.execute(
                select(dep_model.id).where(getattr(dep_model, column) == obj.id).limit(1)
            ).scalar()
            if exists is not None:
                blocking.append(dep_label)
        return blocking

    # --- Points d'extension ---

    def before_create(self, db: Session, school_id: int, values: dict) -> None:
        pass

    def before_update(self, db: Session, obj: Any, values: dict) -> None:
        pass

    def before_delete(self, db: Session, obj: Any) -> None:
        pass

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise Conflict(f"{self.label} conflicts with an existing record")
