from knowledge_hub.domains.identity.entities import User
from knowledge_hub.domains.identity.services import IdentityService


def bearer(user: User) -> dict:
    """Authorization header for the given user"""
    return {"Authorization": f"Bearer {IdentityService.issue_token(user)}"}
