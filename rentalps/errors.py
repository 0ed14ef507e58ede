"""
API error taxonomy.

Every handler raises one of these; the app-level error handler turns them
into ``{"message": ...}`` with the matching status code.
"""


class ApiError(Exception):
    """Base error carrying an HTTP status"""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    """Missing or invalid request field"""
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    """Request collides with existing state (e.g. overlapping booking)"""
    status_code = 409


class InvalidReferenceError(ApiError):
    """Foreign key that does not resolve to an existing row"""
    status_code = 400


class AlreadyPaidError(ConflictError):
    """Payment attempt on a fully paid reservation"""
    status_code = 400


class AuthenticationError(ApiError):
    status_code = 401


class InvalidCredentialsError(ApiError):
    status_code = 422


class PermissionDeniedError(ApiError):
    status_code = 403


class RoomRequiredError(ValidationError):
    """Neither room_id nor nama_room supplied"""

    def __init__(self):
        super().__init__('room_id atau nama_room wajib diisi dan valid')


class RoomNotFoundError(ValidationError):
    """No room matches the supplied name"""

    def __init__(self, room_name):
        super().__init__(f'Ruangan dengan nama "{room_name}" tidak ditemukan')
        self.room_name = room_name
