"""Authentication lifecycle: DTOs and :class:`~.service.AuthService`."""
