"""Maps stored file paths to human-readable category labels.

Callers never see real file paths. Rules are checked in priority order and
the first rule whose substrings all occur in the path wins.

Matching is case-insensitive: the path is lowercased before the rules are
applied, so "Java/setup.md" and "java/setup.md" both map to the Java label.
"""
from typing import Iterable, List, Tuple

from domain_models import DocumentChunk

LABEL_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (('db2',), "Database Configuration Guide"),
    (('maximo', 'install'), "Maximo Installation Guide"),
    (('maximo', 'setup'), "Maximo Setup Guide"),
    (('liberty',), "WebSphere Liberty Configuration"),
    (('mongo',), "MongoDB Configuration Guide"),
    (('java',), "Java Configuration Guide"),
    (('openshift',), "OpenShift Deployment Guide"),
    (('system',), "System Configuration Guide"),
    (('restapi',), "REST API Documentation"),
    (('manage',), "Maximo Manage Configuration"),
    (('mas-suite',), "MAS Suite Installation Guide"),
]

DEFAULT_LABEL = "Technical Documentation"


class SourceLabelSanitizer:
    """Turns retrieved chunks into the source labels shown to callers"""

    def __init__(self, max_labels: int = 1):
        self.max_labels = max_labels

    @staticmethod
    def label_for(file_path: str) -> str:
        path = file_path.lower()
        for needles, label in LABEL_RULES:
            if all(needle in path for needle in needles):
                return label
        return DEFAULT_LABEL

    def labels(self, chunks: Iterable[DocumentChunk]) -> List[str]:
        """Distinct labels in retrieval order, capped at max_labels"""
        result: List[str] = []
        for chunk in chunks:
            label = self.label_for(chunk.file_path)
            if label not in result:
                result.append(label)
            if len(result) >= self.max_labels:
                break
        return result
