"""Request payload validation for translation routes.

Each validator returns the cleaned payload or raises ValidationError with
a list of messages per field.
"""

from translation_hub.errors import ValidationError

KEY_MAX_LENGTH = 255
LOCALE_MAX_LENGTH = 5
CONTEXT_MAX_LENGTH = 100


def _require_object(data):
    if not isinstance(data, dict):
        raise ValidationError({'body': ['The request body must be a JSON object.']})


def _check_string(errors, data, name, max_length=None, required=False):
    if name not in data or data[name] is None:
        if required:
            errors.setdefault(name, []).append(f'The {name} field is required.')
        return
    value = data[name]
    if not isinstance(value, str):
        errors.setdefault(name, []).append(f'The {name} field must be a string.')
        return
    if required and not value.strip():
        errors.setdefault(name, []).append(f'The {name} field is required.')
    if max_length is not None and len(value) > max_length:
        errors.setdefault(name, []).append(
            f'The {name} field must not be greater than {max_length} characters.'
        )


def _check_tags(errors, data):
    tags = data.get('tags')
    if tags is None:
        return
    if not isinstance(tags, list):
        errors.setdefault('tags', []).append('The tags field must be an array.')
        return
    if not all(isinstance(t, str) for t in tags):
        errors.setdefault('tags', []).append('Each tag must be a string.')


def _clean_tags(tags):
    # Set semantics, first-seen order kept
    return list(dict.fromkeys(tags or []))


def validate_create(data) -> dict:
    """Validate a create payload: key, locale, content required."""
    _require_object(data)
    errors = {}
    _check_string(errors, data, 'key', KEY_MAX_LENGTH, required=True)
    _check_string(errors, data, 'locale', LOCALE_MAX_LENGTH, required=True)
    _check_string(errors, data, 'content', required=True)
    _check_string(errors, data, 'context', CONTEXT_MAX_LENGTH)
    _check_tags(errors, data)
    if errors:
        raise ValidationError(errors)

    return {
        'key': data['key'],
        'locale': data['locale'],
        'content': data['content'],
        'context': data.get('context'),
        'tags': _clean_tags(data.get('tags')),
    }


def validate_update(data) -> dict:
    """Validate an update payload.

    `locale` is required. `context` is only present in the result when the
    client sent it (an explicit null is kept as None).
    """
    _require_object(data)
    errors = {}
    _check_string(errors, data, 'locale', LOCALE_MAX_LENGTH, required=True)
    if 'content' in data:
        if not isinstance(data['content'], str):
            errors.setdefault('content', []).append('The content field must be a string.')
    _check_string(errors, data, 'context', CONTEXT_MAX_LENGTH)
    _check_tags(errors, data)
    if errors:
        raise ValidationError(errors)

    cleaned = {'locale': data['locale']}
    if 'content' in data:
        cleaned['content'] = data['content']
    if 'context' in data:
        cleaned['context'] = data['context']
    if 'tags' in data:
        cleaned['tags'] = _clean_tags(data['tags'])
    return cleaned
