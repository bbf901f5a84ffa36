from flask import abort, request


def json_object() -> dict:
    """Parsed JSON body as a dict. Missing/unparseable -> {}; any other JSON type -> 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        abort(400, description="Request body must be a JSON object")
    return data
