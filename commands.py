"""
Management Commands - database setup and admin account maintenance

Usage:
    flask --app wsgi init-db
    flask --app wsgi set-admin NEW_USERNAME --password NEW_PASSWORD
    flask --app wsgi hash-password PASSWORD
"""

import click
from flask import current_app

from extensions import db
from utils.database import get_database, seed_defaults
from utils.security import hash_password


@click.command('init-db')
def init_db_command():
    """Create missing tables and seed the default admin and profile."""
    import models  # noqa: F401
    db.create_all()
    created = seed_defaults(get_database(), current_app.config)
    if created:
        click.echo(f"Created default {', '.join(created)}")
    click.echo('Database tables initialized')


@click.command('set-admin')
@click.argument('username')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.option('--email', default=None, help='Change the admin email as well.')
def set_admin_command(username, password, email):
    """Rename the admin account and set its password, creating it if missing."""
    password_hash = hash_password(password)
    with get_database().transaction() as tx:
        admin = tx.query('SELECT id, email FROM admin ORDER BY id LIMIT 1').first()
        if admin:
            tx.query(
                'UPDATE admin SET username = :username, password_hash = :password_hash, '
                'email = :email WHERE id = :id',
                {'username': username, 'password_hash': password_hash,
                 'email': email or admin['email'], 'id': admin['id']})
            action = 'updated'
        else:
            tx.insert(
                'INSERT INTO admin (username, password_hash, email) '
                'VALUES (:username, :password_hash, :email)',
                {'username': username, 'password_hash': password_hash,
                 'email': email or current_app.config['ADMIN_DEFAULT_EMAIL']})
            action = 'created'

    current_app.logger.info(f"Admin account {action}: {username}")
    click.echo(f'Admin {action} successfully!')


@click.command('hash-password')
@click.argument('password')
def hash_password_command(password):
    """Print a password hash suitable for the admin table."""
    click.echo(hash_password(password))


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(set_admin_command)
    app.cli.add_command(hash_password_command)
