"""
Markdown Blogger — push vault notes (and their images) into a blog project.
"""

__version__ = "0.1.0"
