"""
Public Routes - Portfolio content for visitors
"""

from flask import jsonify

from utils import content
from . import public_bp


@public_bp.route('', methods=['GET'])
@public_bp.route('/', methods=['GET'])
def profile():
    return jsonify({'success': True, 'profile': content.get_profile()})


@public_bp.route('/projects')
def projects():
    return jsonify({'success': True, 'projects': content.list_projects()})


@public_bp.route('/projects/<id:project_id>')
def project_detail(project_id):
    return jsonify({'success': True, 'project': content.get_project(project_id)})


@public_bp.route('/skills')
def skills():
    return jsonify({'success': True, 'skills': content.list_skills()})
