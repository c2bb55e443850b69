import hashlib


class ContentHasher:
    """Generates content hashes for change detection"""

    @staticmethod
    def hash_text(content: str) -> str:
        """Generate SHA256 hash of text content"""
        return hashlib.sha256(content.encode("utf-8")).hexdigest()
