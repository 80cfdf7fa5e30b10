import click

from library_admin.extensions import db


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        import library_admin.models  # noqa: F401
        db.create_all()
        click.echo("Tables created.")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("password")
    def create_admin(email, password):
        """Create EMAIL if needed and add it to the admin allow-list."""
        from library_admin.errors import LibraryError
        from library_admin.repositories.user_repo import UserRepo
        from library_admin.services.auth_service import AuthService

        user = UserRepo.get_by_email(email.strip().lower())
        if user is None:
            try:
                user = AuthService.register(email, password)
            except LibraryError as e:
                raise click.ClickException(str(e))
        AuthService.grant_admin(user)
        click.echo(f"{user.email} is an admin.")
