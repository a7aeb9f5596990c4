"""Credential repositories for administrators and employees."""

from typing import Optional, List
from uuid import UUID
from datetime import datetime

from sqlalchemy import select, func, update

from ..models import Administrator, Employee
from .base import AdminScopedRepository, Repository


class AdministratorRepository(Repository[Administrator]):
    """Repository for administrator accounts (not scoped)."""

    model = Administrator

    async def get_by_email(self, email: str) -> Optional[Administrator]:
        """Get administrator by email (for login)."""
        query = select(Administrator).where(Administrator.email == email)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        query = select(func.count()).select_from(Administrator).where(Administrator.email == email)
        result = await self.session.execute(query)
        return result.scalar_one() > 0

    async def set_password_hash(self, admin_id: UUID, password_hash: str) -> bool:
        """Replace the stored hash. Concurrent changes are last-write-wins."""
        query = (
            update(Administrator)
            .where(Administrator.id == admin_id)
            .values(password_hash=password_hash, updated_at=datetime.utcnow())
        )
        result = await self.session.execute(query)
        return result.rowcount > 0

    async def update_last_login(self, admin: Administrator) -> None:
        admin.last_login = datetime.utcnow()
        await self.session.flush()


class EmployeeRepository(AdminScopedRepository[Employee]):
    """Repository for employees provisioned by one administrator."""

    model = Employee

    async def list_employees(self) -> List[Employee]:
        """All employees of this administrator, oldest first."""
        query = self._base_query().order_by(Employee.created_at)
        result = await self.session.execute(query)
        return list(result.scalars().all())


class GlobalEmployeeRepository(Repository[Employee]):
    """Repository for cross-administrator employee lookups (auth and ownership checks)."""

    model = Employee

    async def get_by_email(self, email: str) -> Optional[Employee]:
        """Get employee by email (for login)."""
        query = select(Employee).where(Employee.email == email)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def email_exists(
        self, email: str, exclude_id: Optional[UUID] = None
    ) -> bool:
        """Check if email is used by any employee."""
        query = (
            select(func.count())
            .select_from(Employee)
            .where(Employee.email == email)
        )
        if exclude_id:
            query = query.where(Employee.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar_one() > 0

    async def set_password_hash(self, employee_id: UUID, password_hash: str) -> bool:
        """Replace the stored hash. Concurrent changes are last-write-wins."""
        query = (
            update(Employee)
            .where(Employee.id == employee_id)
            .values(password_hash=password_hash, updated_at=datetime.utcnow())
        )
        result = await self.session.execute(query)
        return result.rowcount > 0

    async def update_last_login(self, employee: Employee) -> None:
        employee.last_login = datetime.utcnow()
        await self.session.flush()
