"""Create flood alert schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:01:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '20261019_0001'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

GUIDANCE_TABLES = ('safe_routes', 'safe_locations', 'safe_tips')


def upgrade() -> None:
    """Create coordinates, markers, users, alerts and guidance tables."""
    op.create_table(
        'coordinates',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('latitude', sa.Float, nullable=False),
        sa.Column('longitude', sa.Float, nullable=False),
        sa.Column('date_coordinate', sa.Date, nullable=False),
        sa.CheckConstraint('latitude >= -90 AND latitude <= 90', name='coordinates_latitude_check'),
        sa.CheckConstraint('longitude >= -180 AND longitude <= 180', name='coordinates_longitude_check'),
    )
    # Bounding-box lookups filter on both axes
    op.create_index('idx_coordinates_lat_lon', 'coordinates', ['latitude', 'longitude'])

    op.create_table(
        'map_markers',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('intensity', sa.String(20), nullable=False),
        sa.Column('radius', sa.Float, nullable=False),
        sa.Column('coordinates_id', sa.Integer, sa.ForeignKey('coordinates.id'), nullable=False),
        sa.CheckConstraint('radius > 0', name='map_markers_radius_check'),
    )
    op.create_index('idx_map_markers_intensity', 'map_markers', ['intensity'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('coordinates_id', sa.Integer, sa.ForeignKey('coordinates.id'), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'alerts',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('intensity', sa.String(20), nullable=False),
        sa.Column('alert_datetime', sa.DateTime(timezone=True), nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('radius', sa.Float, nullable=True),
        sa.Column('coordinates_id', sa.Integer, sa.ForeignKey('coordinates.id'), nullable=True),
        sa.Column('map_marker_id', sa.Integer, sa.ForeignKey('map_markers.id'), nullable=True),
    )
    op.create_index('idx_alerts_intensity', 'alerts', ['intensity'])
    op.create_index('idx_alerts_marker', 'alerts', ['map_marker_id'])

    op.create_table(
        'safe_routes',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('route', sa.Text, nullable=False),
        sa.Column('alert_id', sa.Integer, sa.ForeignKey('alerts.id'), nullable=False),
    )
    op.create_table(
        'safe_locations',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('alert_id', sa.Integer, sa.ForeignKey('alerts.id'), nullable=False),
    )
    op.create_table(
        'safe_tips',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('tip', sa.Text, nullable=False),
        sa.Column('alert_id', sa.Integer, sa.ForeignKey('alerts.id'), nullable=False),
    )
    for table in GUIDANCE_TABLES:
        op.create_index(f'ix_{table}_alert_id', table, ['alert_id'])


def downgrade() -> None:
    """Drop flood alert schema."""
    for table in reversed(GUIDANCE_TABLES):
        op.drop_index(f'ix_{table}_alert_id', table_name=table)
        op.drop_table(table)

    op.drop_index('idx_alerts_marker', table_name='alerts')
    op.drop_index('idx_alerts_intensity', table_name='alerts')
    op.drop_table('alerts')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    op.drop_index('idx_map_markers_intensity', table_name='map_markers')
    op.drop_table('map_markers')

    op.drop_index('idx_coordinates_lat_lon', table_name='coordinates')
    op.drop_table('coordinates')
