"""SQL injection prevention tests.

SQLAlchemy parameterizes every query, so filter values reach the store as
plain data. The helpers in ``records_api.utils.validation`` only trim them,
and enumeration filters such as employee status only accept known values.
"""

from pathlib import Path
from uuid import UUID

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import employee_data
from records_api.models.domain.user import Identity
from records_api.models.dto.employee import EmployeeFilters
from records_api.models.orm.employee import EmployeeORM
from records_api.services.employee_service import EmployeeService
from records_api.utils.validation import (
    escape_like_wildcards,
    sanitize_exact_filter,
    sanitize_search,
)

SQL_INJECTION_PAYLOADS = [
    # Classic
    "'; DROP TABLE employees; --",
    "1' OR '1'='1",
    "1; DELETE FROM activity_logs WHERE '1'='1",
    "' UNION SELECT * FROM users --",
    # Blind
    "1' AND (SELECT COUNT(*) FROM users) > 0 --",
    "1' AND SUBSTRING((SELECT password_hash FROM users LIMIT 1), 1, 1) = 'a' --",
    "1'; SELECT pg_sleep(5) --",
    # Stacked
    "1'; UPDATE users SET role = 'ADMIN' WHERE email = 'viewer@example.com'; --",
    # Encodings
    "%27%20OR%201%3D1%20--",
    "ʼ OR 1=1 --",
    # Comments
    "1'/**/OR/**/1=1--",
    "1'#",
    # PostgreSQL specific
    "$$; DROP TABLE employees; $$",
    # NULL byte
    "1'\x00 OR 1=1 --",
]

XSS_PAYLOADS = [
    "<script>alert('XSS')</script>",
    "<img src=x onerror=alert('XSS')>",
    "<svg onload=alert('XSS')>",
    "'><script>alert('XSS')</script>",
]


class TestSanitizers:
    """The sanitizers trim and bound input but never rewrite its characters."""

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS + XSS_PAYLOADS)
    def test_search_kept_verbatim(self, payload: str) -> None:
        assert sanitize_search(payload) == payload.strip()

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS + XSS_PAYLOADS)
    def test_exact_filter_kept_verbatim(self, payload: str) -> None:
        assert sanitize_exact_filter(payload) == payload.strip()

    @pytest.mark.parametrize(
        "value",
        ["C++ Developer", "R&D #1", "Ops: EMEA", "help@desk", "john--doe", "a;b"],
    )
    def test_special_characters_preserved(self, value: str) -> None:
        assert sanitize_search(value) == value
        assert sanitize_exact_filter(f"  {value} ") == value

    def test_max_length_enforcement(self) -> None:
        assert len(sanitize_search("A" * 1000)) == 200
        assert len(sanitize_exact_filter("A" * 1000)) == 255

    def test_empty_and_none_handling(self) -> None:
        assert sanitize_search(None) is None
        assert sanitize_exact_filter(None) is None

        assert sanitize_search("") is None
        assert sanitize_search("   ") is None
        assert sanitize_exact_filter("") is None
        assert sanitize_exact_filter("   ") is None

    def test_like_wildcard_escaping(self) -> None:
        assert escape_like_wildcards("test%value") == r"test\%value"
        assert escape_like_wildcards("test_value") == r"test\_value"
        assert escape_like_wildcards("test%_value") == r"test\%\_value"
        assert escape_like_wildcards("test\\value") == r"test\\value"

        escaped = escape_like_wildcards("test%'; DROP TABLE employees; --")
        assert "%" not in escaped.replace(r"\%", "")


class TestEnumerationFilters:
    """Status filters only accept known values."""

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_status_filter_rejects_injection(self, payload: str) -> None:
        with pytest.raises(PydanticValidationError):
            EmployeeFilters(status=payload)

    @pytest.mark.parametrize("payload", ["'; DROP TABLE employees; --", "1 OR 1=1", "not-a-uuid", ""])
    def test_uuid_parameter_validation(self, payload: str) -> None:
        with pytest.raises(ValueError):
            UUID(payload)


class TestInjectionReachesStoreAsData:
    """Injection payloads are matched as plain text."""

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS[:4])
    async def test_search_payload_matches_nothing(
        self, db_session: AsyncSession, hr: Identity, payload: str
    ) -> None:
        service = EmployeeService(db_session)
        await service.create_employee(employee_data(), hr)

        listing = await service.list_employees(EmployeeFilters(search=payload), hr)

        assert listing.items == []
        assert (await service.list_employees(None, hr)).pagination.total == 1

    async def test_payload_stored_verbatim(self, db_session: AsyncSession, hr: Identity) -> None:
        payload = "Robert'); DROP TABLE employees;--"
        service = EmployeeService(db_session)

        created = await service.create_employee(employee_data(notes=payload), hr)

        assert (await service.get_employee(created.id, hr)).notes == payload

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS[:4])
    async def test_department_payload_matches_nothing(
        self, db_session: AsyncSession, hr: Identity, payload: str
    ) -> None:
        service = EmployeeService(db_session)
        await service.create_employee(employee_data(), hr)

        listing = await service.list_employees(
            EmployeeFilters(department=sanitize_exact_filter(payload)), hr
        )

        assert listing.items == []
        assert listing.pagination.total == 0


class TestNoRawSQL:
    """Repositories never build raw SQL strings."""

    def test_no_text_in_repositories(self) -> None:
        repo_dir = Path(__file__).parent.parent / "src" / "records_api" / "repositories"
        if not repo_dir.exists():
            pytest.skip("Repository directory not found")

        for path in repo_dir.glob("*.py"):
            for i, line in enumerate(path.read_text().splitlines(), 1):
                stripped = line.strip()
                if stripped.startswith("#"):
                    continue
                if ".execute(text(" in line or "= text(" in line or "import text" in line:
                    pytest.fail(f"Potential raw SQL in {path.name}:{i}: {stripped}")

    def test_filter_query_is_parameterized(self) -> None:
        malicious_input = "'; DROP TABLE employees; --"
        query = select(EmployeeORM).where(
            EmployeeORM.department == malicious_input,
            EmployeeORM.name.ilike(f"%{escape_like_wildcards(malicious_input)}%", escape="\\"),
        )

        sql_str = str(query.compile(dialect=postgresql.dialect()))

        assert malicious_input not in sql_str
        assert "%(department_1)s" in sql_str
