LOGIN_PATH = "/api/login"


class NotAuthenticatedError(Exception):
    def __init__(self, reason: str = "Unauthorized", login_url: str = LOGIN_PATH):
        self.reason = reason
        self.login_url = login_url
        super().__init__(f"Not authenticated: {reason}")
