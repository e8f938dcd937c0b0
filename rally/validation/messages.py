"""
Human-readable messages for failed validation rules.
"""

FALLBACK_MESSAGE = "Некорректное значение поля"

MESSAGES = {
    "required": "Это поле обязательно для заполнения",
    "username": (
        "Логин должен содержать от 3 до 50 символов и состоять только из "
        "латинских букв, цифр, дефиса и подчеркивания"
    ),
    "strong_password": (
        "Пароль должен содержать минимум 12 символов, включая заглавные и "
        "строчные буквы, а также цифры"
    ),
    "eqfield": "Значение должно совпадать с полем {param}",
    "min": "Минимальная длина: {param} символов",
    "max": "Максимальная длина: {param} символов",
    "email": "Некорректный формат email",
}


def error_message(tag: str, param: str = "") -> str:
    """Return the message for rule *tag*, filling in its parameter."""
    template = MESSAGES.get(tag)
    if template is None:
        return FALLBACK_MESSAGE
    return template.format(param=param)
