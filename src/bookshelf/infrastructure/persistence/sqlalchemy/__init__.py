"""SQLAlchemy persistence for the bookshelf domain."""
