"""
Base service class with common CRUD patterns
"""
from typing import Type, TypeVar, Optional, Any, Generic
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

T = TypeVar('T')


class BaseService(Generic[T]):
    """Base service class with common CRUD operations"""

    def __init__(self, db: Session, model_class: Type[T]):
        self.db = db
        self.model_class = model_class

    def get_by_id(self, obj_id: Any) -> Optional[T]:
        """Get object by ID"""
        return self.db.query(self.model_class).filter(
            self.model_class.id == obj_id
        ).first()

    def get_by_id_or_404(self, obj_id: Any) -> T:
        """Get object by ID or raise 404"""
        obj = self.get_by_id(obj_id)
        if not obj:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self.model_class.__name__} not found"
            )
        return obj

    def count(self, **filters) -> int:
        """Count objects with given filters"""
        query = self.db.query(self.model_class)
        if filters:
            query = query.filter_by(**filters)
        return query.count()
