# tests/test_cli.py
from storefront_api import cli
from storefront_api.container import build_container
from storefront_api.db import Base, db_session
from storefront_api.db.models import Category, HeroSlide, Product, PromoBanner, UserRole
from storefront_api.repositories import UsersRepository
from storefront_api.security import verify_password


class TestCli:

    def test_seed_admin_then_reset_password(self, settings, capsys):
        """
        Scenario: seed-admin twice with different passwords.
        Expected: one admin account whose password is the latest one.
        """
        # Arrange
        container = build_container(settings)
        Base.metadata.create_all(container.engine())
        args = cli.build_parser().parse_args(["seed-admin", "--email", "boss@example.com", "--password", "first-pass"])

        # Act
        cli.cmd_seed_admin(container, args)
        args.password = "second-pass"
        cli.cmd_seed_admin(container, args)

        # Assert
        with db_session(container.session_factory()) as session:
            user = UsersRepository(session).get_by_email("boss@example.com")
            assert user.role == UserRole.ADMIN
            assert verify_password("second-pass", user.password_hash)
        assert "password reset" in capsys.readouterr().out

    def test_seed_catalog_is_idempotent(self, settings):
        container = build_container(settings)
        Base.metadata.create_all(container.engine())

        assert cli.cmd_seed_catalog(container, None) == 0
        assert cli.cmd_seed_catalog(container, None) == 0

        with db_session(container.session_factory()) as session:
            assert session.query(Category).count() == len(cli.DEMO_CATEGORIES)
            assert session.query(Product).count() == len(cli.DEMO_PRODUCTS)
            assert session.query(HeroSlide).count() == len(cli.DEMO_SLIDES)
            assert session.query(PromoBanner).count() == len(cli.DEMO_BANNERS)

    def test_notifier_status_without_configuration(self, settings):
        container = build_container(settings)

        assert cli.cmd_notifier_status(container, None) == 1
