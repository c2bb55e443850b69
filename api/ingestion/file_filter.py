"""File filtering policy for repository listings

Decides which listed repository files are text-like and worth indexing.
Binary files, vendored dependencies and hidden directories are excluded.
"""
from pathlib import PurePosixPath


class FileFilterPolicy:
    """Determines which repository files should be indexed

    Single reason to change: when the text-file rules need updating.
    """

    TEXT_EXTENSIONS = {
        '.md', '.markdown', '.mdx', '.txt', '.rst', '.adoc', '.asciidoc',
        '.yaml', '.yml', '.json', '.xml', '.toml', '.ini', '.cfg', '.conf',
        '.properties', '.env.example', '.csv', '.sql',
        '.sh', '.bash', '.ps1', '.bat',
        '.py', '.java', '.js', '.jsx', '.ts', '.tsx', '.go', '.rb', '.kt',
        '.html', '.htm', '.css', '.j2', '.tpl',
    }

    TEXT_FILENAMES = {
        'readme', 'license', 'changelog', 'dockerfile', 'makefile',
        'jenkinsfile', 'procfile', 'notice', 'authors', 'contributing',
    }

    EXCLUDED_DIRS = {
        'node_modules', '__pycache__', 'vendor', 'dist', 'build',
        'target', 'bin', 'obj', 'venv', '.venv',
    }

    EXCLUDED_FILE_PATTERNS = [
        '*.min.js', '*.min.css', '*.lock', 'package-lock.json',
    ]

    def is_text_file(self, name: str) -> bool:
        """Check if a file name looks like text content."""
        filename = PurePosixPath(name).name.lower()
        if not filename or self._matches_excluded_pattern(filename):
            return False
        if filename in self.TEXT_FILENAMES:
            return True
        return any(filename.endswith(ext) for ext in self.TEXT_EXTENSIONS)

    def should_index(self, path: str) -> bool:
        """Full predicate: text file outside excluded/hidden directories."""
        return not self._is_in_excluded_directory(path) and self.is_text_file(path)

    def _is_in_excluded_directory(self, path: str) -> bool:
        """Check if any directory part of path is excluded"""
        for part in PurePosixPath(path).parts[:-1]:
            if self._is_excluded_part(part):
                return True
        return False

    def _is_excluded_part(self, part: str) -> bool:
        """Check if single path part should be excluded"""
        if part in self.EXCLUDED_DIRS:
            return True
        # Hidden directories (.git, .github, ...)
        return part.startswith('.') and part not in ('.', '..')

    def _matches_excluded_pattern(self, filename: str) -> bool:
        """Check if filename matches any excluded patterns"""
        for pattern in self.EXCLUDED_FILE_PATTERNS:
            if self._pattern_matches(filename, pattern):
                return True
        return False

    @staticmethod
    def _pattern_matches(filename: str, pattern: str) -> bool:
        if pattern.startswith('*'):
            return filename.endswith(pattern[1:])
        return filename == pattern
