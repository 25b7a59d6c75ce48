"""
JSON response envelope used by every blueprint.

    {"success": true,  "data": ...}
    {"success": false, "error": "message"}
"""
from flask import jsonify


def success(data=None, status=200):
    return jsonify({'success': True, 'data': data}), status


def failure(message, status=400, **extra):
    payload = {'success': False, 'error': message}
    payload.update(extra)
    return jsonify(payload), status


def form_errors(form):
    """400 response listing every field error of a WTForms form."""
    messages = [
        f'{form[name].label.text}: {message}'
        for name, errors in form.errors.items()
        for message in errors
    ]
    return failure('; '.join(messages) or 'Invalid input', errors=form.errors)
