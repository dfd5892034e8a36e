"""reviewcover - pick a small set of reviewers who know the files you changed."""

__version__ = "0.1.0"
