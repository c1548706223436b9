import logging
from typing import List, Optional

from shortlink_app.exceptions import (
    DuplicateCodeError,
    GenerationExhaustedError,
    InvalidInputError,
    LinkNotFoundError,
)
from shortlink_app.models.link import Link
from shortlink_app.services.code_generator import ShortCodeGenerator
from shortlink_app.services.validation import validate_create_request
from shortlink_app.storage.link_store import LinkStore

logger = logging.getLogger(__name__)


class LinkService:
    """
    Link Service with dependency injection for storage and code generation.
    
    One method per use case: create, resolve (redirect), get, list, delete.
    Each failure surfaces as one LinkError subclass, which the API layer
    maps to a status code. Nothing is retried here; retrying is up to
    the client.
    """
    
    def __init__(
        self,
        store: LinkStore,
        code_generator: Optional[ShortCodeGenerator] = None
    ):
        """
        Initialize link service with dependencies.
        
        Args:
            store: Link store (the only shared mutable resource)
            code_generator: Generator for codes when the client gives none
        """
        self.store = store
        self.code_generator = code_generator or ShortCodeGenerator()

    def create_link(self, target_url: Optional[str], custom_code: Optional[str] = None) -> Link:
        """Create a new short link
        
        Process:
        1. Validate URL (always) and custom code (if given)
        2. Custom code: insert directly, the unique index decides conflicts
        3. No code: generate one that is free right now, then insert
        
        Raises:
            InvalidInputError: malformed URL or code
            DuplicateCodeError: custom code already taken
            GenerationExhaustedError: no free code found, or the generated
                code was taken between the existence check and the insert
        """
        validation = validate_create_request(target_url, custom_code)
        if not validation.valid:
            raise InvalidInputError(validation.error)

        if custom_code:
            # No pre-check: two racing creates are settled by the insert itself
            link = self.store.insert(custom_code, target_url)
        else:
            link = self._insert_generated(target_url)

        logger.info("Created link %s -> %s", link.code, link.target_url)
        return link

    def _insert_generated(self, target_url: str) -> Link:
        generator = self.code_generator
        code = generator.generate_unique(self.store.exists)
        if code is None:
            raise GenerationExhaustedError(generator.max_attempts)

        try:
            return self.store.insert(code, target_url)
        except DuplicateCodeError as e:
            logger.warning("Generated code %s was taken before insert", code)
            raise GenerationExhaustedError(generator.max_attempts) from e

    def resolve_link(self, code: str) -> str:
        """Record a click and return the target URL to redirect to
        
        Lookup and increment are two store calls. If the link is deleted
        in between, the increment finds nothing and this is reported as
        not found, exactly like a missing code.
        """
        link = self.store.find_by_code(code)
        if link is None:
            raise LinkNotFoundError(code)

        clicked = self.store.increment_click(code)
        if clicked is None:
            logger.info("Link %s deleted during redirect", code)
            raise LinkNotFoundError(code)

        return clicked.target_url

    def get_link(self, code: str) -> Link:
        """Get a link by code (no side effects)"""
        link = self.store.find_by_code(code)
        if link is None:
            raise LinkNotFoundError(code)
        return link

    def list_links(self) -> List[Link]:
        """All links, ordered by creation time ascending"""
        return self.store.list_all()

    def delete_link(self, code: str) -> str:
        """Delete a link and return its code
        
        The code becomes available for new links immediately.
        """
        if not self.store.delete(code):
            raise LinkNotFoundError(code)

        logger.info("Deleted link %s", code)
        return code
