class SkillExchangeError(Exception):
    """Base exception for the skill exchange service."""


class ValidationError(SkillExchangeError):
    def __init__(self, errors: list[str], message: str = "Validation error"):
        self.errors = errors
        self.message = message
        super().__init__(f"{message}: {'; '.join(errors)}" if errors else message)


class NotFoundError(SkillExchangeError):
    resource = "Resource"

    def __init__(self, identifier: object | None = None):
        self.identifier = identifier
        super().__init__(f"{self.resource} not found")


class SkillNotFoundError(NotFoundError):
    resource = "Skill"


class ReviewNotFoundError(NotFoundError):
    resource = "Review"


class InvalidIdentifierError(SkillExchangeError):
    def __init__(self, kind: str, raw: object):
        self.kind = kind
        self.raw = raw
        super().__init__(f"Invalid {kind} ID format")


class InternalError(SkillExchangeError):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(detail)
