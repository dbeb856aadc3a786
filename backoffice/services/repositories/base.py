"""Base repository with shared Supabase client."""

from supabase._async.client import AsyncClient

# PostgREST caps a single response at 1000 rows by default
PAGE_SIZE = 1000


class BaseRepository:
    """Base class for all repositories.

    All methods use await with the async client.
    """

    def __init__(self, client: AsyncClient) -> None:
        self.client = client
