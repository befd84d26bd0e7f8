"""svn-crawler: incremental Subversion history harvesting for search indexing."""

__version__ = "0.1.0"
