"""CLI to create admin accounts or promote existing accounts to admin."""

import sys
from pathlib import Path

import click

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.models.user import (  # noqa: E402  # pylint: disable=wrong-import-position
    UserCredential,
)
from app.security import (  # noqa: E402  # pylint: disable=wrong-import-position
    hash_password,
)
from app.services import (  # noqa: E402  # pylint: disable=wrong-import-position
    database,
)
from app.services.credentials import (  # noqa: E402  # pylint: disable=wrong-import-position
    get_credential_store,
)
from app.validators import (  # noqa: E402  # pylint: disable=wrong-import-position
    MIN_PASSWORD_LENGTH,
    is_valid_email,
)


@click.command()
@click.option("--email", prompt="Email", help="Email of the admin account")
@click.option("--name", default=None, help="Name for a new account")
def create_admin(email: str, name: str | None) -> None:
    """Promote EMAIL to admin, creating the account if it does not exist."""
    if not is_valid_email(email):
        raise click.BadParameter("invalid email format", param_hint="--email")

    database.get_client()
    database.ensure_indexes()
    store = get_credential_store()

    existing = store.get(email)
    if existing is not None:
        store.put(existing.model_copy(update={"is_admin": True}))
        click.echo(f"\nUser {email} promoted to admin.\n")
        return

    if not name:
        name = click.prompt("Name")
    password = click.prompt("Password", hide_input=True, confirmation_prompt=True)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise click.BadParameter(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    store.put(
        UserCredential(
            email=email,
            name=name,
            password=hash_password(password),
            is_admin=True,
        )
    )
    click.echo(f"\nAdmin user {email} created.\n")


if __name__ == "__main__":
    create_admin()  # pylint: disable=no-value-for-parameter
