"""
Request helpers shared by the blueprints.
"""

from flask import request

from unipet.errors import ValidationError


def request_payload():
    """Return the request body as a dict, accepting JSON or form data.

    A JSON body that is not an object is rejected with a ValidationError.
    """
    data = request.get_json(silent=True)
    if data is None:
        return request.form.to_dict() if request.form else {}
    if not isinstance(data, dict):
        raise ValidationError('O corpo da requisição deve ser um objeto JSON')
    return data
