# app/services/__init__.py
"""
Service layer root package.

Each subpackage implements application use-cases on top of:

- SQLAlchemy models (app.models.*)
- Repositories (app.repositories.*)
- Pydantic schemas (app.schemas.*)
- Common service infrastructure (app.services.base.*)

Typical pattern for a service operation:

    class SomeService(BaseService):
        def some_use_case(self, principal, ...):
            with self.operation_boundary("do something", ErrorMessages.FAILED_TO_X, ref):
                require_capability(principal, Capability.SOMETHING)
                ...
                with self.transaction():
                    self.repository.create(...)
"""
