# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service-level failures.

Every rejected operation raises a ``ServiceError`` subclass. Kinds are the
intermediate base classes; each class carries the machine-readable code used
on the wire and the HTTP status the API layer answers with.
Storage failures are not wrapped and propagate as ``SQLAlchemyError``.
"""


class ServiceError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "internal error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ── Kinds ──

class NotFoundError(ServiceError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "resource not found"


class ConflictError(ServiceError):
    code = "CONFLICT"
    status_code = 409
    default_message = "conflict"


class InvalidStateError(ServiceError):
    code = "INVALID_STATE"
    status_code = 409
    default_message = "operation not allowed in current state"


class InvalidInputError(ServiceError):
    code = "INVALID_REQUEST"
    status_code = 400
    default_message = "invalid input"


# ── Not found ──

class TeamNotFound(NotFoundError):
    default_message = "team not found"


class UserNotFound(NotFoundError):
    default_message = "user not found"


class AuthorNotFound(NotFoundError):
    default_message = "author not found"


class PRNotFound(NotFoundError):
    default_message = "PR not found"


# ── Conflicts ──

class TeamAlreadyExists(ConflictError):
    code = "TEAM_EXISTS"
    status_code = 400
    default_message = "team_name already exists"


class PRAlreadyExists(ConflictError):
    code = "PR_EXISTS"
    default_message = "PR id already exists"


class ReviewerNotAssigned(ConflictError):
    code = "NOT_ASSIGNED"
    default_message = "reviewer is not assigned to this PR"


class NoReplacementCandidate(ConflictError):
    code = "NO_CANDIDATE"
    default_message = "no active replacement candidate in team"


# ── State / input ──

class PRMerged(InvalidStateError):
    code = "PR_MERGED"
    default_message = "cannot reassign on merged PR"


class UserNotInTeam(InvalidInputError):
    code = "USER_NOT_IN_TEAM"
    default_message = "user is not a member of the specified team"
