"""PDF table documents."""
from .writer import TablePDF
