"""
Database Module - Persistence adapter over the SQLAlchemy engine

Statements use named parameters (``:name``) and are bound through
``sqlalchemy.text`` so the driver placeholder style never reaches callers.
The backend classes only differ in how an INSERT reports its new id.
"""

from contextlib import contextmanager

from flask import current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

import models  # noqa: F401
from extensions import db
from .errors import DatabaseError

EXTENSION_KEY = 'portfolio_database'


class QueryResult:
    """Rows and affected row count of one executed statement"""

    def __init__(self, rows=None, rowcount=0):
        self.rows = rows or []
        self.rowcount = rowcount

    def first(self):
        return self.rows[0] if self.rows else None

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)


class Backend:
    name = None
    is_postgres = False

    def execute(self, conn, statement, params):
        result = conn.execute(text(statement), params or {})
        rows = [dict(row._mapping) for row in result] if result.returns_rows else []
        return QueryResult(rows, result.rowcount)

    def insert(self, conn, statement, params):
        raise NotImplementedError


class SQLiteBackend(Backend):
    """Inserted ids come from the driver cursor"""
    name = 'sqlite'

    def insert(self, conn, statement, params):
        result = conn.execute(text(statement), params or {})
        return result.lastrowid


class PostgresBackend(Backend):
    """Inserted ids come from a RETURNING clause"""
    name = 'postgresql'
    is_postgres = True

    def insert(self, conn, statement, params):
        result = conn.execute(text(f"{statement.rstrip().rstrip(';')} RETURNING id"), params or {})
        return result.scalar_one()


BACKENDS = {
    'sqlite': SQLiteBackend,
    'postgresql': PostgresBackend,
}


def backend_for(dialect_name):
    try:
        return BACKENDS[dialect_name]()
    except KeyError:
        raise ValueError(f"Unsupported database backend: {dialect_name}")


class Transaction:
    """Statements issued on one connection, committed together"""

    def __init__(self, conn, backend):
        self.conn = conn
        self.backend = backend

    def query(self, statement, params=None):
        return self.backend.execute(self.conn, statement, params)

    def insert(self, statement, params=None):
        return self.backend.insert(self.conn, statement, params)


class Database:
    """Uniform query interface used by the services layer"""

    def __init__(self, engine):
        self.engine = engine
        self.backend = backend_for(engine.dialect.name)

    @property
    def is_postgres(self):
        return self.backend.is_postgres

    @contextmanager
    def transaction(self):
        """Run several statements atomically; rolls back on any exception"""
        try:
            with self.engine.begin() as conn:
                yield Transaction(conn, self.backend)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error: {str(e)}")
            raise DatabaseError() from e

    def query(self, statement, params=None):
        with self.transaction() as tx:
            return tx.query(statement, params)

    def insert(self, statement, params=None):
        """Execute an INSERT and return the generated id"""
        with self.transaction() as tx:
            return tx.insert(statement, params)

    def close(self):
        self.engine.dispose()


def get_database():
    """Return the adapter bound to the current application"""
    return current_app.extensions[EXTENSION_KEY]


def init_database(app):
    """Create the adapter, the schema and the default rows for ``app``"""
    with app.app_context():
        database = Database(db.engine)
        app.extensions[EXTENSION_KEY] = database

        db.create_all()
        seed_defaults(database, app.config)
    return database


def seed_defaults(database, config):
    """Insert the default admin and profile when their tables are empty.

    Safe to run on every startup: each insert is guarded by an existence
    check inside the same transaction.
    """
    from .security import hash_password

    created = []
    with database.transaction() as tx:
        if not tx.query('SELECT id FROM admin LIMIT 1').first():
            tx.insert(
                'INSERT INTO admin (username, password_hash, email) '
                'VALUES (:username, :password_hash, :email)',
                {
                    'username': config['ADMIN_DEFAULT_USERNAME'],
                    'password_hash': hash_password(config['ADMIN_DEFAULT_PASSWORD']),
                    'email': config['ADMIN_DEFAULT_EMAIL'],
                })
            created.append('admin')

        if not tx.query('SELECT id FROM profile LIMIT 1').first():
            tx.query(
                'INSERT INTO profile (id, name, role, professional_identity, bio, email) '
                'VALUES (1, :name, :role, :professional_identity, :bio, :email)',
                {
                    'name': 'Your Name',
                    'role': 'Full Stack Developer',
                    'professional_identity': 'Building scalable web applications',
                    'bio': 'I am a passionate developer with expertise in building modern web applications.',
                    'email': 'your.email@example.com',
                })
            created.append('profile')

    for name in created:
        current_app.logger.info(f"✓ Default {name} created")
    return created


__all__ = [
    'QueryResult',
    'Backend',
    'SQLiteBackend',
    'PostgresBackend',
    'Transaction',
    'Database',
    'backend_for',
    'get_database',
    'init_database',
    'seed_defaults'
]
