"""
Base repository.
Generic CRUD operations.
"""
from typing import TypeVar, Generic, Optional, List, Dict, Type, Tuple, Any
from sqlmodel import Session, select, func, col

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Generic base repository.
    
    Provides the CRUD operations shared by every model.
    
    Usage:
        class MyRepository(BaseRepository[MyModel]):
            def __init__(self, session: Session):
                super().__init__(session, MyModel)
    """
    
    def __init__(self, session: Session, model: Type[T]):
        """
        Initializes the repository.
        
        Args:
            session: Database session
            model: SQLModel class
        """
        self.session = session
        self.model = model
    
    def get_by_id(self, id: str) -> Optional[T]:
        """
        Returns a record by ID.
        
        Args:
            id: Record ID
        
        Returns:
            The record or None if it does not exist
        """
        return self.session.get(self.model, id)
    
    def add(self, obj: T) -> T:
        """
        Stages a new record without committing.
        
        Args:
            obj: Model instance
        
        Returns:
            The same instance
        """
        self.session.add(obj)
        return obj
    
    def count(self) -> int:
        """Counts every record."""
        result = self.session.exec(
            select(func.count()).select_from(self.model)
        ).first()
        return result or 0
    
    def paginate(self, query: Any, page: int, limit: int) -> Tuple[List[T], int]:
        """
        Runs a query one page at a time.
        
        Args:
            query: Filtered and ordered select statement
            page: 1-based page number
            limit: Page size
        
        Returns:
            Tuple (records of the page, total matching records)
        """
        total = self.session.exec(
            select(func.count()).select_from(query.order_by(None).subquery())
        ).one()
        items = self.session.exec(
            query.offset((page - 1) * limit).limit(limit)
        ).all()
        return list(items), total
    
    def get_many(self, ids: List[str]) -> Dict[str, T]:
        """
        Loads several records in one query.
        
        Args:
            ids: Record IDs (None values are ignored)
        
        Returns:
            Dictionary id -> record for the records that exist
        """
        wanted = {i for i in ids if i}
        if not wanted:
            return {}
        query = select(self.model).where(col(self.model.id).in_(wanted))
        return {obj.id: obj for obj in self.session.exec(query).all()}
