"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy.orm import Session

from app.config.logging import get_logger
from app.core.constants import ErrorMessages
from app.core.exceptions import BaseAppException, InternalError, ResourceNotFoundError
from app.core.permissions import Principal
from app.models.user.user import User
from app.repositories.user.user_repository import UserRepository


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Operation boundaries converting unexpected failures to InternalError
    - Transaction management utilities
    """

    def __init__(self, db_session: Session):
        """
        Initialize base service.

        Args:
            db_session: SQLAlchemy database session
        """
        self.db: Session = db_session
        self._logger = get_logger(f"app.services.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        message: Optional[str] = None,
    ) -> InternalError:
        """
        Log an unexpected exception with context and convert it to InternalError.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, email, etc.)
            message: Fixed user-facing message for this operation

        Returns:
            InternalError to be raised by the caller
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )

        return InternalError(message or ErrorMessages.INTERNAL_ERROR)

    @contextmanager
    def operation_boundary(
        self,
        operation: str,
        message: Optional[str] = None,
        entity_ref: Optional[Any] = None,
    ) -> Iterator[None]:
        """
        Wrap a public operation.

        Application exceptions propagate unchanged; anything else rolls the
        session back and surfaces as InternalError with `message`.
        """
        try:
            yield
        except BaseAppException as e:
            self._rollback()
            self._logger.warning(f"{operation} rejected: {e.error_code.value}: {e.message}")
            raise
        except Exception as e:
            self._rollback()
            raise self._handle_exception(e, operation, entity_ref, message) from e

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self, auto_commit: bool = True) -> Iterator[Session]:
        """
        Context manager for database transactions with automatic rollback.

        Example:
            with self.transaction():
                self.leave_types.create(LeaveType(name="Sick Leave"))
                # automatic commit on success, rollback on exception
        """
        try:
            yield self.db
            if auto_commit:
                self._commit()
        except Exception:
            self._rollback()
            raise

    def _commit(self) -> None:
        """Commit the current transaction."""
        try:
            self.db.commit()
            self._logger.debug("Transaction committed successfully")
        except Exception as e:
            self._logger.error(f"Commit failed: {e}", exc_info=True)
            self._rollback()
            raise

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
            self._logger.debug("Transaction rolled back")
        except Exception as e:
            # Rollback errors must not mask the original error
            self._logger.warning(f"Rollback failed: {e}")

    # -------------------------------------------------------------------------
    # Caller resolution
    # -------------------------------------------------------------------------

    @staticmethod
    def _resolve_caller(users: UserRepository, principal: Principal) -> User:
        """
        Load the user record behind an authenticated principal.

        Raises:
            ResourceNotFoundError: If no user has the principal's email
        """
        user = users.get_by_email(principal.email)
        if user is None:
            raise ResourceNotFoundError(
                "User",
                principal.email,
                message=ErrorMessages.email_not_found(principal.email),
            )
        return user
