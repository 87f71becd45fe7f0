"""Session ports."""

from shrine_client.session.ports.outbound import PRINCIPAL_KEY, TOKEN_KEY, TokenStore

__all__ = ["PRINCIPAL_KEY", "TOKEN_KEY", "TokenStore"]
