"""CIGAR indexing, BED annotations, drawing state, colours and settings for PAF alignment viewing."""

__version__ = "0.1.0"

__all__ = ["annotations", "binning", "cigar", "cli", "colors", "config", "draw"]