# Copyright (c) 2024 RAG-KB Contributors
# SPDX-License-Identifier: MIT

"""
GitHub source provider - lists and fetches repository files.

Listings use the git trees API (one recursive call per repository),
content uses the contents API with the raw media type so no base64
decoding is needed. Failures are raised per call and never retried here.
"""

import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import requests

from config import default_config, SourceConfig
from domain_models import FileRef, RepositoryRef, SourceFile
from ingestion.file_filter import FileFilterPolicy

logger = logging.getLogger(__name__)

RAW_MEDIA_TYPE = "application/vnd.github.raw"


class SourceProviderError(Exception):
    """Listing or fetching from the repository host failed"""
    pass


class GitHubSourceProvider:
    """Reads files from the configured GitHub repositories.

    Args:
        config: SourceConfig with base URL, token, repositories and timeout
        file_filter: Text-file predicate (defaults to FileFilterPolicy)
        session: Optional requests.Session (injected by tests)
    """

    def __init__(self, config: SourceConfig = default_config.source,
                 file_filter: Optional[FileFilterPolicy] = None,
                 session: Optional[requests.Session] = None):
        self.config = config
        self.file_filter = file_filter or FileFilterPolicy()
        self.session = session or requests.Session()

    @property
    def repositories(self) -> List[RepositoryRef]:
        return list(self.config.repositories)

    def list_all_files(self) -> List[FileRef]:
        """List every blob of every configured repository.

        A repository that cannot be listed raises SourceProviderError;
        the caller decides whether the whole run fails.
        """
        files = []
        for repository in self.config.repositories:
            files.extend(self.list_files(repository))
        return files

    def list_files(self, repository: RepositoryRef) -> List[FileRef]:
        url = (f"{self.config.base_url}/repos/{repository.owner}/{repository.name}"
               f"/git/trees/{repository.branch}")
        payload = self._get(url, params={"recursive": "1"}).json()
        if payload.get("truncated"):
            logger.warning(f"Tree listing truncated for {repository.full_name}")

        files = [
            FileRef(path=entry["path"], repository_full_name=repository.full_name)
            for entry in payload.get("tree", [])
            if entry.get("type") == "blob"
        ]
        logger.info(f"Listed {len(files)} files in {repository.full_name}@{repository.branch}")
        return files

    def is_text_file(self, name: str) -> bool:
        """Check if a listed path should be treated as text content"""
        return self.file_filter.should_index(name)

    def fetch_content(self, repository: RepositoryRef, path: str) -> SourceFile:
        """Fetch raw file content at the repository's configured branch"""
        url = f"{self.config.base_url}/repos/{repository.owner}/{repository.name}/contents/{quote(path, safe='/')}"
        response = self._get(url, params={"ref": repository.branch},
                             headers={"Accept": RAW_MEDIA_TYPE})
        response.encoding = response.encoding or "utf-8"
        return SourceFile(path=path, repository=repository, raw_content=response.text)

    def _get(self, url: str, params: Optional[Dict] = None,
             headers: Optional[Dict] = None) -> requests.Response:
        """GET with auth and timeout; non-2xx and transport errors raise SourceProviderError"""
        try:
            response = self.session.get(
                url,
                params=params,
                headers={**self._auth_headers(), **(headers or {})},
                timeout=self.config.timeout_seconds
            )
        except requests.RequestException as e:
            raise SourceProviderError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            raise SourceProviderError(
                f"GitHub API returned status {response.status_code} for {url}"
            )
        return response

    def _auth_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers
