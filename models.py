from extensions import db
from sqlalchemy import event
from sqlalchemy.engine import Engine
import sqlite3


# SQLite only honours ON DELETE CASCADE when foreign keys are switched on
@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


class Admin(db.Model):
    __tablename__ = 'admin'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())


class Profile(db.Model):
    __tablename__ = 'profile'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(255), nullable=False)
    professional_identity = db.Column(db.Text)
    bio = db.Column(db.Text)
    profile_image_url = db.Column(db.String(500))
    resume_url = db.Column(db.String(500))
    email = db.Column(db.String(255))
    github_url = db.Column(db.String(500))
    linkedin_url = db.Column(db.String(500))
    twitter_url = db.Column(db.String(500))
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    short_description = db.Column(db.Text)
    detailed_description = db.Column(db.Text)
    category = db.Column(db.String(100))
    image_url = db.Column(db.String(500))
    github_link = db.Column(db.String(500))
    live_link = db.Column(db.String(500))
    video_url = db.Column(db.String(500))
    display_order = db.Column(db.Integer, nullable=False, server_default='0')
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    # Relationships
    tech_stack = db.relationship('TechStackEntry', backref='project', lazy=True,
                                 cascade='all, delete-orphan', passive_deletes=True,
                                 order_by='TechStackEntry.id')


class TechStackEntry(db.Model):
    __tablename__ = 'tech_stack'
    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    technology = db.Column(db.String(255), nullable=False)

    __table_args__ = (
        db.Index('idx_tech_stack_project', 'project_id'),
    )


class Skill(db.Model):
    __tablename__ = 'skills'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(100))
    proficiency_level = db.Column(db.Integer, nullable=False, server_default='0')
    display_order = db.Column(db.Integer, nullable=False, server_default='0')
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
