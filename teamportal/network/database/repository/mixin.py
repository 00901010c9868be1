from typing import TYPE_CHECKING, Any, Generic, List, Optional, Sequence, Type, TypeVar, Union

from loguru import logger
from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError, MultipleResultsFound, NoResultFound
from sqlalchemy.orm import Query, Session
from sqlalchemy.sql.elements import BinaryExpression, ColumnElement, UnaryExpression

from teamportal.common.domain import BaseDomain
from teamportal.network.database.repository.exceptions import (
    MultipleRepositoryObjectsFound,
    PreventingModelTruncation,
    RepositoryObjectNotFound,
)
from teamportal.network.database.session import db

if TYPE_CHECKING:
    from teamportal.common.model import BaseModel


class BaseQueryManager:
    def __init__(self, model: Type['BaseModel']) -> None:  # type: ignore[type-arg]
        self.model = model

    def get_query(self, *clauses: Any, **specification: Any) -> 'Query[BaseModel]':  # type: ignore[type-arg]
        query = self.model._get_session().query(self.model)
        for clause in clauses:
            query = query.where(clause)
        for key, value in specification.items():
            query = self.model._parse_specification(query, key, value)
        return query


ReadDomainType = TypeVar('ReadDomainType', bound=BaseDomain)
CreateDomainType = TypeVar('CreateDomainType', bound=BaseDomain)


class RepositoryMixin(Generic[ReadDomainType, CreateDomainType]):
    """
    Database access layer. All interaction with the database should be routed
    through this layer. all public interfaces accept domains subclasses from the
    pydantic base class with from_attributes for simple domain -> orm mapping
    """

    __create_domain__: Type[CreateDomainType] = NotImplemented
    __read_domain__: Type[ReadDomainType] = NotImplemented
    query_manager: Type[BaseQueryManager] | None = BaseQueryManager

    @classmethod
    def _get_session(cls) -> Session:
        return db.session

    @classmethod
    def get_query(cls, *clauses: Any, **specification: Any) -> 'Query[BaseModel]':  # type: ignore[type-arg]
        if cls.query_manager is None:
            raise ValueError(f'query_manager not set for {cls.__name__}')
        return cls.query_manager(cls).get_query(*clauses, **specification)  # type: ignore[arg-type]

    @classmethod
    def get(cls, *clauses: Union[BinaryExpression[Any], ColumnElement[bool]], **specification: Any) -> ReadDomainType:
        instance = cls._get(*clauses, **specification)

        return cls._to_domain(instance)

    @classmethod
    def get_or_none(cls, *clauses: Any, **specification: Any) -> ReadDomainType | None:
        try:
            instance = cls._get(*clauses, **specification)
        except RepositoryObjectNotFound:
            return None

        return cls._to_domain(instance)

    @classmethod
    def get_for_update(cls, *clauses: Any, **specification: Any) -> ReadDomainType:
        """
        Same as get but holds a row lock until the surrounding transaction ends.
        Concurrent writers calling this for the same row queue up behind it.
        """
        try:
            instance = cls.get_query(*clauses, **specification).with_for_update().one()
        except NoResultFound:
            raise RepositoryObjectNotFound(f'{cls.__name__}: {specification} not found!')

        return cls._to_domain(instance)

    @classmethod
    def _get(cls, *clauses: Any, **specification: Any) -> 'BaseModel[Any, Any]':
        try:
            return cls.get_query(*clauses, **specification).one()
            # assert one and only one object returned
        except MultipleResultsFound:
            raise MultipleRepositoryObjectsFound(f'Multiple results found for {cls.__name__}: {specification}!')
        except NoResultFound:
            raise RepositoryObjectNotFound(f'{cls.__name__}: {specification} not found!')

    @classmethod
    def list(
        cls,
        *clauses: Any,
        ordering: Optional[List[Union[str, UnaryExpression]]] = None,
        **specification: Any,  # type: ignore[type-arg]
    ) -> List[ReadDomainType]:
        query = cls.get_query(*clauses, **specification)
        if ordering:
            orders = cls._parse_ordering(ordering)
            query = query.order_by(*orders)
        return [cls._to_domain(obj) for obj in query]

    @classmethod
    def exists(cls, *clauses: Any, **specification: Any) -> bool:
        return cls._get_session().query(cls.get_query(*clauses, **specification).exists()).scalar()

    @classmethod
    def count(cls, *clauses: Any, **specification: Any) -> int:
        query = cls.get_query(*clauses, **specification)
        return int(query.count())

    @classmethod
    def create(cls, domain_obj: CreateDomainType) -> ReadDomainType:
        model_instance = cls._create(**domain_obj.to_dict())
        return cls._to_domain(model_instance)

    @classmethod
    def upsert(
        cls,
        domain_obj: CreateDomainType,
        index_elements: Sequence[str],
        update_fields: Sequence[str],
    ) -> ReadDomainType:
        """
        Insert or, when a row already matches the unique index, update it in
        place. Relies on the database constraint so concurrent upserts never
        produce duplicates.
        """
        values = domain_obj.to_dict()
        statement = insert(cls).values(**values)
        statement = statement.on_conflict_do_update(
            index_elements=list(index_elements),
            set_={
                **{field: statement.excluded[field] for field in update_fields},
                'modified_at': func.now(),
            },
        ).returning(cls.id)  # type: ignore[attr-defined]
        try:
            row_id = cls._get_session().execute(statement).scalar_one()
        except IntegrityError:
            cls._get_session().rollback()
            raise

        # The statement bypasses the identity map, make sure we read fresh state
        cls._get_session().expire_all()
        return cls.get(cls.id == row_id)  # type: ignore[attr-defined]

    @classmethod
    def delete(cls, *clauses: Union[BinaryExpression[Any], ColumnElement[bool]], **specification: Any) -> int:
        if specification:
            logger.warning(f'specification kwargs for {cls.__name__}.delete is deprecated please dont use!')

        if not clauses and not specification:
            raise PreventingModelTruncation(f'Must pass clauses to avoid truncating {cls.__name__}')

        # and_() or or_() without arguments compile to nothing
        if clauses and not any(str(clause.compile()) for clause in clauses):
            raise PreventingModelTruncation(f'Empty clauses would cause truncating {cls.__name__}!')

        try:
            return cls.get_query(*clauses, **specification).delete()
        except IntegrityError:
            cls._get_session().rollback()
            raise

    @classmethod
    def update(cls, id: str, **updates: Any) -> ReadDomainType:
        model_instance = cls.get_query(id=id).one()
        for key, value in updates.items():
            if not hasattr(model_instance, key):
                raise ValueError(f"The key '{key}' is not a valid attribute for this model.")
            setattr(model_instance, key, value)

        try:
            cls._get_session().flush([model_instance])
        except IntegrityError:
            cls._get_session().rollback()
            raise

        return cls.get(cls.id == id)  # type: ignore[attr-defined]

    @classmethod
    def _create(cls, **attributes: Any) -> 'BaseModel[Any, Any]':
        model_instance = cls(**attributes)
        cls._get_session().add(model_instance)
        try:
            cls._get_session().flush([model_instance])
        except IntegrityError:
            cls._get_session().rollback()
            raise

        return model_instance  # type: ignore[return-value]

    @classmethod
    def _parse_ordering(
        cls, ordering: List[Union[str, 'UnaryExpression[Any]']] | None = None
    ) -> List['UnaryExpression[Any]']:
        """
        Parses str references for a field like:
        ['-date', 'created_at']
        """
        order_expressions = []
        if ordering:
            for order in ordering:
                if isinstance(order, str):
                    if order[0] == '-':
                        ordering_attr = getattr(cls, order[1:])
                        order_expressions.append(ordering_attr.desc())
                    else:
                        ordering_attr = getattr(cls, order)
                        order_expressions.append(ordering_attr.asc())
                else:
                    # Assume already an expression
                    order_expressions.append(order)

        return order_expressions

    @classmethod
    def _parse_specification(cls, query: Any, key: Any, value: Any) -> Any:
        return query.where(getattr(cls, key) == value)

    @classmethod
    def _to_domain(cls, model_instance: 'BaseModel[Any, Any]') -> ReadDomainType:
        return cls.__read_domain__.model_validate(model_instance)  # type: ignore[no-any-return]
