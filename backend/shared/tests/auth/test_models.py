from __future__ import annotations

import pytest
from pydantic import ValidationError

from shared.auth.models import AdminUser


class TestAdminUserValidation:
    def test_empty_password_hash_rejected(self):
        with pytest.raises(ValidationError, match="password hash"):
            AdminUser(user_id="a1", username="manager", password_hash="")

    def test_is_immutable(self):
        admin = AdminUser(user_id="a1", username="manager", password_hash="simple$x")
        with pytest.raises(ValidationError):
            admin.username = "owner"
