# jewelry_api/scripts/create_admin.py
import click
from flask import current_app
from flask.cli import with_appcontext

from ..constants.service_code import ROLES
from ..extensions.identity import get_identity
from ..services.account_service import create_account
from ..utils.logger import Log


@click.command("create-admin")
@click.option("--email", required=True, help="Login email of the new admin.")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--first-name", default="", help="First name.")
@click.option("--last-name", default="", help="Last name.")
@click.option("--branch-id", default="", help="Home branch, optional for admins.")
@with_appcontext
def create_admin_command(email, password, first_name, last_name, branch_id):
    """Bootstrap an admin account (user creation over HTTP needs a token)."""
    log_tag = f"[create_admin.py][create_admin_command][{current_app.config.get('APP_ENV')}][{email}]"

    uid = create_account(
        get_identity(),
        email=email,
        password=password,
        role=ROLES["ADMIN"],
        branch_id=branch_id,
        first_name=first_name,
        last_name=last_name,
        log_tag=log_tag,
    )

    Log.info(f"{log_tag} Admin created: {uid}")
    click.echo(f"Admin created: {uid}")


def register_commands(app):
    app.cli.add_command(create_admin_command)
