"""
Shared module for code used by the REST API, the CLI and the dashboard.

CLEAN ARCHITECTURE STRUCTURE:
- shared.security: Authentication and rate limiting
  - auth.py: ID token signing/verification, current_user_context
  - rate_limit.py: slowapi limiter for open registration

- shared.infrastructure: Database and request correlation
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and log filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, AppointmentStatus, Limits, defaults

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Input sanitization, SSRF prevention
  - schemas.py: Pydantic request/response schemas
  - health.py: Time-boxed health probes

IMPORT EXAMPLES:
    from shared.security.auth import verify_id_token, current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, AppointmentStatus
    from shared.utils.exceptions import NotFoundError, ValidationError
    from shared.utils.validators import validate_image_url
"""
