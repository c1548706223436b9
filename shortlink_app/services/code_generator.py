"""
Random short code generation with bounded collision retry.
"""

import logging
import secrets
import string
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_letters + string.digits  # 62 characters
CODE_LENGTH = 6  # Generated codes only; custom codes may be 6-8
DEFAULT_MAX_ATTEMPTS = 3


class ShortCodeGenerator:
    """
    Random code generator.
    Draws 6-character codes uniformly from [A-Za-z0-9] and retries on
    collision a bounded number of times.
    
    62^6 (about 5.7e10) codes means a collision streak long enough to
    exhaust the attempts points at contention, not a full keyspace.
    
    One instance is shared by all request threads.
    """
    
    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        if max_attempts < 1:
            raise ValueError("max_attempts must be positive")
        self.length = CODE_LENGTH
        self.max_attempts = max_attempts
        self.characters = CODE_ALPHABET
        self._collision_count = 0
        self._collision_lock = threading.Lock()
    
    @property
    def collision_count(self) -> int:
        """Collisions seen since startup"""
        with self._collision_lock:
            return self._collision_count
    
    def _record_collision(self) -> None:
        with self._collision_lock:
            self._collision_count += 1
    
    def generate(self) -> str:
        """Generate one random code (no uniqueness check)"""
        # secrets.choice draws uniformly; random.choice is not meant for ids
        return ''.join(secrets.choice(self.characters) for _ in range(self.length))
    
    def generate_unique(self, exists_check: Callable[[str], bool]) -> Optional[str]:
        """
        Generate a code that exists_check reports as free.
        
        Args:
            exists_check: Predicate returning True if a code is already taken
            
        Returns:
            The first free candidate, or None when every attempt collided
        """
        for attempt in range(1, self.max_attempts + 1):
            code = self.generate()
            
            if not exists_check(code):
                return code
            
            self._record_collision()
            logger.warning(
                "Short code collision detected: %s (attempt %d/%d)",
                code, attempt, self.max_attempts
            )
        
        logger.error(
            "Failed to generate unique short code after %d attempts",
            self.max_attempts
        )
        return None
