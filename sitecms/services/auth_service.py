import hmac


class AuthGate:
    """Checks the shared admin key sent with mutating requests."""

    def __init__(self, config):
        self.admin_key = config.admin_key

    def authorize(self, candidate):
        if not isinstance(candidate, str) or not candidate or not self.admin_key:
            return False
        return hmac.compare_digest(candidate.encode("utf-8"), self.admin_key.encode("utf-8"))
