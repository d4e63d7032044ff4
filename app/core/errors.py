class BlogError(Exception):
    """Base class for blog domain errors."""


class EmptySlugError(BlogError):
    """The title has no character that survives slug normalization."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"Title '{title}' does not produce a usable slug")


class SlugConflictError(BlogError):
    """Another post kept taking the slug while this one was being saved."""

    def __init__(self, slug: str, attempts: int):
        self.slug = slug
        self.attempts = attempts
        super().__init__(f"Could not reserve slug '{slug}' after {attempts} attempts")


class PostIdConflictError(BlogError):
    """The id sequence handed out an id that is already stored."""

    def __init__(self, post_id: int):
        self.post_id = post_id
        super().__init__(f"Post id {post_id} is already in use, the id counter is behind")
