"""
Content Module - Profile, project and skill storage

Read functions back the public API; write functions are only reached
through the token-guarded admin blueprint.
"""

from flask import current_app

from .database import get_database
from .errors import ValidationError, NotFound
from .helpers import to_int, clean_text, normalize_url, serialize_row


PROFILE_ID = 1

PROFILE_FIELDS = (
    'name', 'role', 'professional_identity', 'bio', 'profile_image_url',
    'resume_url', 'email', 'github_url', 'linkedin_url', 'twitter_url',
)
SOCIAL_URL_FIELDS = ('github_url', 'linkedin_url', 'twitter_url')

PROJECT_FIELDS = (
    'title', 'short_description', 'detailed_description', 'category',
    'image_url', 'github_link', 'live_link', 'video_url',
)

SKILL_FIELDS = ('name', 'category')

PROFICIENCY_MIN = 0
PROFICIENCY_MAX = 100

LIST_ORDER = 'ORDER BY display_order ASC, created_at DESC, id DESC'


# ==================== PROFILE ====================

def get_profile():
    row = get_database().query('SELECT * FROM profile WHERE id = :id', {'id': PROFILE_ID}).first()
    if row is None:
        raise NotFound('Profile not found')
    return serialize_row(row)


def _profile_values(fields):
    values = {name: clean_text(fields.get(name)) for name in PROFILE_FIELDS}
    if not values['name'] or not values['role']:
        raise ValidationError('Name and role are required')
    for name in SOCIAL_URL_FIELDS:
        values[name] = normalize_url(values[name])
    return values


def upsert_profile(fields):
    """Update the singleton profile in place, inserting it with id 1 if absent"""
    values = _profile_values(fields)
    values['id'] = PROFILE_ID

    with get_database().transaction() as tx:
        existing = tx.query('SELECT id FROM profile WHERE id = :id', {'id': PROFILE_ID}).first()
        if existing:
            tx.query(
                'UPDATE profile SET name = :name, role = :role, '
                'professional_identity = :professional_identity, bio = :bio, '
                'profile_image_url = :profile_image_url, resume_url = :resume_url, '
                'email = :email, github_url = :github_url, linkedin_url = :linkedin_url, '
                'twitter_url = :twitter_url, updated_at = CURRENT_TIMESTAMP '
                'WHERE id = :id', values)
        else:
            tx.query(
                'INSERT INTO profile (id, name, role, professional_identity, bio, '
                'profile_image_url, resume_url, email, github_url, linkedin_url, twitter_url) '
                'VALUES (:id, :name, :role, :professional_identity, :bio, '
                ':profile_image_url, :resume_url, :email, :github_url, :linkedin_url, :twitter_url)',
                values)

    current_app.logger.info(f"Profile {'updated' if existing else 'created'}")
    return values


# ==================== PROJECTS ====================

def _tech_stack(value):
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(t, str) for t in value):
        raise ValidationError('tech_stack must be a list of strings')
    return list(value)


def _project_values(fields):
    values = {name: clean_text(fields.get(name)) for name in PROJECT_FIELDS}
    if not values['title']:
        raise ValidationError('Title is required')
    values['display_order'] = to_int(fields.get('display_order'))
    return values


def _insert_tech_stack(tx, project_id, tech_stack):
    for technology in tech_stack:
        tx.query(
            'INSERT INTO tech_stack (project_id, technology) VALUES (:project_id, :technology)',
            {'project_id': project_id, 'technology': technology})


def get_tech_stack(project_id):
    rows = get_database().query(
        'SELECT technology FROM tech_stack WHERE project_id = :project_id ORDER BY id',
        {'project_id': project_id})
    return [row['technology'] for row in rows]


def list_projects():
    database = get_database()
    projects = [serialize_row(row) for row in database.query(f'SELECT * FROM projects {LIST_ORDER}')]

    stacks = {}
    for row in database.query('SELECT project_id, technology FROM tech_stack ORDER BY id'):
        stacks.setdefault(row['project_id'], []).append(row['technology'])

    for project in projects:
        project['tech_stack'] = stacks.get(project['id'], [])
    return projects


def get_project(project_id):
    row = get_database().query('SELECT * FROM projects WHERE id = :id', {'id': project_id}).first()
    if row is None:
        raise NotFound('Project not found')
    project = serialize_row(row)
    project['tech_stack'] = get_tech_stack(project['id'])
    return project


def create_project(fields, tech_stack=None):
    """Insert a project and its technologies; returns the new project id"""
    values = _project_values(fields)
    tech_stack = _tech_stack(tech_stack)

    with get_database().transaction() as tx:
        project_id = tx.insert(
            'INSERT INTO projects (title, short_description, detailed_description, category, '
            'image_url, github_link, live_link, video_url, display_order) '
            'VALUES (:title, :short_description, :detailed_description, :category, '
            ':image_url, :github_link, :live_link, :video_url, :display_order)',
            values)
        _insert_tech_stack(tx, project_id, tech_stack)

    current_app.logger.info(f"Project created: {project_id} ({values['title']})")
    return project_id


def update_project(project_id, fields, tech_stack=None):
    """Update a project and replace its whole tech stack"""
    values = _project_values(fields)
    values['id'] = project_id
    tech_stack = _tech_stack(tech_stack)

    with get_database().transaction() as tx:
        result = tx.query(
            'UPDATE projects SET title = :title, short_description = :short_description, '
            'detailed_description = :detailed_description, category = :category, '
            'image_url = :image_url, github_link = :github_link, live_link = :live_link, '
            'video_url = :video_url, display_order = :display_order, '
            'updated_at = CURRENT_TIMESTAMP WHERE id = :id', values)
        if result.rowcount == 0:
            raise NotFound('Project not found')

        tx.query('DELETE FROM tech_stack WHERE project_id = :project_id', {'project_id': project_id})
        _insert_tech_stack(tx, project_id, tech_stack)

    current_app.logger.info(f"Project updated: {project_id}")


def delete_project(project_id):
    with get_database().transaction() as tx:
        tx.query('DELETE FROM tech_stack WHERE project_id = :project_id', {'project_id': project_id})
        result = tx.query('DELETE FROM projects WHERE id = :id', {'id': project_id})

    if result.rowcount:
        current_app.logger.info(f"Project deleted: {project_id}")


# ==================== SKILLS ====================

def _skill_values(fields):
    values = {name: clean_text(fields.get(name)) for name in SKILL_FIELDS}
    if not values['name']:
        raise ValidationError('Name is required')

    values['proficiency_level'] = to_int(fields.get('proficiency_level'))
    if not PROFICIENCY_MIN <= values['proficiency_level'] <= PROFICIENCY_MAX:
        raise ValidationError(
            f'proficiency_level must be between {PROFICIENCY_MIN} and {PROFICIENCY_MAX}')
    values['display_order'] = to_int(fields.get('display_order'))
    return values


def list_skills():
    return [serialize_row(row) for row in get_database().query(f'SELECT * FROM skills {LIST_ORDER}')]


def get_skill(skill_id):
    row = get_database().query('SELECT * FROM skills WHERE id = :id', {'id': skill_id}).first()
    if row is None:
        raise NotFound('Skill not found')
    return serialize_row(row)


def create_skill(fields):
    values = _skill_values(fields)
    skill_id = get_database().insert(
        'INSERT INTO skills (name, category, proficiency_level, display_order) '
        'VALUES (:name, :category, :proficiency_level, :display_order)',
        values)
    current_app.logger.info(f"Skill created: {skill_id} ({values['name']})")
    return skill_id


def update_skill(skill_id, fields):
    values = _skill_values(fields)
    values['id'] = skill_id
    result = get_database().query(
        'UPDATE skills SET name = :name, category = :category, '
        'proficiency_level = :proficiency_level, display_order = :display_order '
        'WHERE id = :id', values)
    if result.rowcount == 0:
        raise NotFound('Skill not found')


def delete_skill(skill_id):
    get_database().query('DELETE FROM skills WHERE id = :id', {'id': skill_id})


__all__ = [
    'PROFILE_ID',
    'get_profile',
    'upsert_profile',
    'get_tech_stack',
    'list_projects',
    'get_project',
    'create_project',
    'update_project',
    'delete_project',
    'list_skills',
    'get_skill',
    'create_skill',
    'update_skill',
    'delete_skill'
]
