# tests/services/test_auth_service.py
import threading

import pytest
from sqlalchemy import select

from storefront_api.config import load_settings
from storefront_api.db import Base, build_engine, build_session_factory, db_session
from storefront_api.db.models import Address
from storefront_api.repositories import UsersRepository
from storefront_api.schemas.auth import ShippingAddressInput, UpdateProfileRequest
from storefront_api.services.auth_service import AuthService


@pytest.fixture
def file_db(tmp_path):
    """
    File-backed SQLite with a real connection pool, so each thread gets its
    own connection and transaction.
    """
    settings = load_settings(
        APP_ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'storefront.db'}",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
        _env_file=None,
    )
    engine = build_engine(settings)
    Base.metadata.create_all(engine)
    yield settings, build_session_factory(engine)
    engine.dispose()


def _address(city: str) -> ShippingAddressInput:
    return ShippingAddressInput(
        address=f"1 {city} Road", city=city, region="Greater Accra", zip_code="00233", country="Ghana"
    )


class TestConcurrentProfileUpdates:

    def test_concurrent_address_updates_leave_one_default(self, file_db):
        """
        Scenario: Two threads update the same user's shipping address at the
        same moment, each on its own session, several rounds in a row.
        Expected: Every update succeeds and exactly one address is default.
        """
        # Arrange
        settings, factory = file_db
        with db_session(factory) as session:
            user_id = UsersRepository(session).create(
                first_name="Ama", last_name="Mensah", email="ama@example.com", password_hash="x"
            ).id

        errors = []

        def update(city: str, barrier: threading.Barrier) -> None:
            try:
                with db_session(factory) as session:
                    barrier.wait(timeout=5)
                    AuthService(session, settings).update_profile(
                        user_id, UpdateProfileRequest(shipping_address=_address(city))
                    )
            except Exception as exc:
                errors.append(exc)

        rounds = 3
        for round_no in range(rounds):
            barrier = threading.Barrier(2)
            threads = [
                threading.Thread(target=update, args=(f"{city}-{round_no}", barrier))
                for city in ("Accra", "Kumasi")
            ]

            # Act
            for t in threads:
                t.start()
            for t in threads:
                t.join(timeout=30)

            # Assert
            assert errors == []
            with db_session(factory) as session:
                rows = session.execute(select(Address).where(Address.user_id == user_id)).scalars().all()
                assert len(rows) == 2 * (round_no + 1)
                assert len([r for r in rows if r.is_default]) == 1
