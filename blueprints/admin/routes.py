"""
Admin Routes - Content management
Every route in this blueprint requires a valid admin bearer token.
"""

from flask import current_app, g, jsonify, request

from utils import content
from utils.decorators import authenticate_request
from utils.errors import ValidationError
from utils.helpers import get_payload
from utils.uploads import upload_image, upload_resume
from . import admin_bp


@admin_bp.before_request
def require_admin():
    """Guard all admin routes; CORS preflight requests pass through"""
    if request.method == 'OPTIONS':
        return None
    authenticate_request()


def _uploaded_file(field):
    file = request.files.get(field)
    if file is None or not file.filename:
        raise ValidationError('No file uploaded')
    return file.read(), file.filename, file.mimetype


# ==================== UPLOADS ====================

@admin_bp.route('/upload', methods=['POST'])
def upload():
    """Upload an image to the asset host"""
    data, filename, mimetype = _uploaded_file('image')
    url = upload_image(data, filename, mimetype)
    return jsonify({'success': True, 'url': url, 'message': 'File uploaded successfully'})


@admin_bp.route('/upload-resume', methods=['POST'])
def upload_resume_file():
    """Upload a PDF resume to the asset host"""
    data, filename, mimetype = _uploaded_file('resume')
    url = upload_resume(data, filename, mimetype)
    return jsonify({'success': True, 'url': url, 'message': 'Resume uploaded successfully'})


# ==================== PROFILE ====================

@admin_bp.route('/profile', methods=['PUT'])
def update_profile():
    content.upsert_profile(get_payload())
    current_app.logger.info(f"Profile saved by {g.admin['username']}")
    return jsonify({'success': True, 'message': 'Profile updated successfully'})


# ==================== PROJECTS ====================

@admin_bp.route('/projects', methods=['POST'])
def create_project():
    data = get_payload()
    project_id = content.create_project(data, data.get('tech_stack'))
    return jsonify({
        'success': True,
        'message': 'Project created successfully',
        'projectId': project_id
    })


@admin_bp.route('/projects/<id:project_id>', methods=['PUT'])
def update_project(project_id):
    data = get_payload()
    content.update_project(project_id, data, data.get('tech_stack'))
    return jsonify({'success': True, 'message': 'Project updated successfully'})


@admin_bp.route('/projects/<id:project_id>', methods=['DELETE'])
def delete_project(project_id):
    content.delete_project(project_id)
    return jsonify({'success': True, 'message': 'Project deleted successfully'})


# ==================== SKILLS ====================

@admin_bp.route('/skills', methods=['POST'])
def create_skill():
    skill_id = content.create_skill(get_payload())
    return jsonify({'success': True, 'message': 'Skill added successfully', 'skillId': skill_id})


@admin_bp.route('/skills/<id:skill_id>', methods=['PUT'])
def update_skill(skill_id):
    content.update_skill(skill_id, get_payload())
    return jsonify({'success': True, 'message': 'Skill updated successfully'})


@admin_bp.route('/skills/<id:skill_id>', methods=['DELETE'])
def delete_skill(skill_id):
    content.delete_skill(skill_id)
    return jsonify({'success': True, 'message': 'Skill deleted successfully'})
