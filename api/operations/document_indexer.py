from config import default_config
from domain_models import SourceFile
from ingestion.chunking import TextChunker
from ingestion.helpers import ContentHasher
from pipeline.interfaces.chunker import ChunkerInterface
from value_objects import ProcessingResult


class DocumentIndexer:
    """Chunks fetched file content and upserts it into the document store.

    Every reprocess re-chunks the file; the content hash is recorded on each
    chunk but unchanged files are not skipped.
    """

    def __init__(self, store, chunker: ChunkerInterface = None):
        self.store = store
        self.chunker = chunker or TextChunker(
            size=default_config.chunks.size,
            overlap=default_config.chunks.overlap
        )

    def index_file(self, source: SourceFile) -> ProcessingResult:
        """Index single file. Returns ProcessingResult"""
        pieces = self.chunker.chunkify(source.raw_content)
        count = self.store.upsert_chunks(
            source.path,
            source.repository,
            list(enumerate(pieces)),
            content_hash=ContentHasher.hash_text(source.raw_content)
        )
        return ProcessingResult.success(source.path, count)
