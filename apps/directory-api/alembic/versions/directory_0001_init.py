"""directory_0001_init

Create tables:
- categories
- facilities
- facility_statuses
"""

from alembic import op

revision = "directory_0001"
down_revision = None
branch_labels = ("directory",)
depends_on = None


def upgrade() -> None:
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS categories (
          id INTEGER PRIMARY KEY,
          name VARCHAR(128) NOT NULL
        )
        """
    )
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS facilities (
          id INTEGER PRIMARY KEY,
          title VARCHAR(255) NOT NULL,
          category_id INTEGER,
          description TEXT NOT NULL DEFAULT '',
          house_number VARCHAR(32),
          street_name VARCHAR(255),
          town VARCHAR(128),
          county VARCHAR(128),
          postcode VARCHAR(16),
          lat DOUBLE PRECISION NOT NULL,
          lng DOUBLE PRECISION NOT NULL,
          contributor_id INTEGER
        )
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS ix_facilities_category_id ON facilities (category_id)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_facilities_town ON facilities (town)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_facilities_county ON facilities (county)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_facilities_postcode ON facilities (postcode)")
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS facility_statuses (
          id INTEGER PRIMARY KEY,
          facility_id INTEGER NOT NULL,
          comment VARCHAR(100) NOT NULL,
          author_id INTEGER,
          timestamp TIMESTAMP WITH TIME ZONE NOT NULL
        )
        """
    )
    op.execute(
        "CREATE INDEX IF NOT EXISTS ix_facility_statuses_current "
        "ON facility_statuses (facility_id, timestamp DESC, id DESC)"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS facility_statuses")
    op.execute("DROP TABLE IF EXISTS facilities")
    op.execute("DROP TABLE IF EXISTS categories")
