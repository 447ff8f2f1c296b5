from contact_dedupe.runners.local import LocalDedupePipeline
from contact_dedupe.runners.parallel import ParallelDedupePipeline

__all__ = ["LocalDedupePipeline", "ParallelDedupePipeline"]
