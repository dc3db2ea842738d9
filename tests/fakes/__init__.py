from tests.fakes.fake_genai import FakeGenaiClient
from tests.fakes.fake_repositories import FakeDocumentRepository, FakeUserRepository

__all__ = ["FakeGenaiClient", "FakeDocumentRepository", "FakeUserRepository"]
