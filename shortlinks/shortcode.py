"""Short code generation utilities."""

import random
import string
import uuid
from typing import Callable, Optional

from .errors import ConflictError, CodeGenerationError


class ShortCodeGenerator:
    """Generate short codes for URLs."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits

    def __init__(self, default_length: int = 6, max_attempts: int = 1000):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            max_attempts: Random draws tried before falling back to a UUID code
        """
        self.default_length = default_length
        self.max_attempts = max_attempts

    def generate(
        self,
        custom: Optional[str] = None,
        exists: Callable[[str], bool] = lambda code: False,
    ) -> str:
        """Produce a short code that does not collide with existing ones.

        Args:
            custom: Optional user supplied code, returned verbatim if free
            exists: Predicate telling whether a code is already taken

        Returns:
            Unique short code

        Raises:
            ConflictError: If the custom code is already taken
            CodeGenerationError: If no free code could be drawn
        """
        if custom:
            if exists(custom):
                raise ConflictError(f"Custom shortcode '{custom}' already exists")
            return custom

        for _ in range(self.max_attempts):
            code = self.generate_random()
            if not exists(code):
                return code

        # Last resort: UUID-based code
        code = self.generate_from_uuid()
        if not exists(code):
            return code

        raise CodeGenerationError(
            f"Unable to generate unique short code after {self.max_attempts} attempts"
        )

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(random.choices(self.BASE62_CHARS, k=length))

    def generate_from_uuid(self, length: Optional[int] = None) -> str:
        """Generate short code from UUID.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Short code based on UUID
        """
        length = length or self.default_length
        code = self._int_to_base62(uuid.uuid4().int)
        return code[:length]

    def _int_to_base62(self, num: int) -> str:
        """Convert integer to base62 string."""
        if num == 0:
            return self.BASE62_CHARS[0]

        result = []
        base = len(self.BASE62_CHARS)

        while num > 0:
            num, remainder = divmod(num, base)
            result.append(self.BASE62_CHARS[remainder])

        return ''.join(reversed(result))

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code is non-empty and alphanumeric.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
