"""역할 상수입니다."""

ADMIN = "admin"
EDITOR = "editor"

WRITE_ROLES = (ADMIN, EDITOR)
