"""create response core tables

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-19

Creates incident_reports, incident_response_routes, notifications and zones.
The partial unique index on notifications allows at most one eta_reminder per
incident report.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID as PGUUID

# revision identifiers, used by Alembic.
revision = 'a1c2e3f4b5d6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'incident_reports',
        sa.Column('id', PGUUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('reporter_email', sa.String(), nullable=False),
        sa.Column('reporter_name', sa.String(), nullable=True),

        # Geospatial
        sa.Column('coordinates', sa.JSON(), nullable=True),
        sa.Column('barangay', sa.String(), nullable=True),

        # Lifecycle
        sa.Column('status', sa.String(), nullable=False, server_default='pending'),
        sa.Column('priority', sa.String(), nullable=False, server_default='medium'),

        # Timing
        sa.Column('scheduled_response_time', sa.String(), nullable=True),
        sa.Column('estimated_arrival_time', sa.String(), nullable=True),
        sa.Column('actual_response_started', sa.DateTime(), nullable=True),
        sa.Column('actual_resolved_time', sa.DateTime(), nullable=True),
        sa.Column('current_eta_minutes', sa.Integer(), nullable=True),
        sa.Column('response_route_data', sa.JSON(), nullable=True),

        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_incident_reports_reporter_email'), 'incident_reports', ['reporter_email'])
    op.create_index(op.f('ix_incident_reports_status'), 'incident_reports', ['status'])
    op.create_index(op.f('ix_incident_reports_created_at'), 'incident_reports', ['created_at'])

    op.create_table(
        'incident_response_routes',
        sa.Column('id', PGUUID(as_uuid=True), nullable=False),
        sa.Column('incident_report_id', PGUUID(as_uuid=True), nullable=False),
        sa.Column('origin', sa.JSON(), nullable=True),
        sa.Column('route_coordinates', sa.JSON(), nullable=True),
        sa.Column('calculated_distance_km', sa.Float(), nullable=False),
        sa.Column('calculated_duration_minutes', sa.Float(), nullable=False),
        sa.Column('calculated_eta_minutes', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['incident_report_id'], ['incident_reports.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        op.f('ix_incident_response_routes_incident_report_id'),
        'incident_response_routes',
        ['incident_report_id'],
    )
    op.create_index(op.f('ix_incident_response_routes_created_at'), 'incident_response_routes', ['created_at'])

    op.create_table(
        'notifications',
        sa.Column('id', PGUUID(as_uuid=True), nullable=False),
        sa.Column('user_email', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(), nullable=False, server_default='info'),
        sa.Column('read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_automated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('trigger_type', sa.String(), nullable=False),
        sa.Column('related_report_id', PGUUID(as_uuid=True), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['related_report_id'], ['incident_reports.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_notifications_user_email'), 'notifications', ['user_email'])
    op.create_index(op.f('ix_notifications_trigger_type'), 'notifications', ['trigger_type'])
    op.create_index(op.f('ix_notifications_created_at'), 'notifications', ['created_at'])
    op.create_index(
        'uq_notifications_eta_reminder',
        'notifications',
        ['related_report_id', 'trigger_type'],
        unique=True,
        postgresql_where=sa.text("trigger_type = 'eta_reminder'"),
    )

    op.create_table(
        'zones',
        sa.Column('id', PGUUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('polygons', sa.JSON(), nullable=True),
        sa.Column('centroid', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )


def downgrade() -> None:
    op.drop_table('zones')
    op.drop_index('uq_notifications_eta_reminder', table_name='notifications')
    op.drop_index(op.f('ix_notifications_created_at'), table_name='notifications')
    op.drop_index(op.f('ix_notifications_trigger_type'), table_name='notifications')
    op.drop_index(op.f('ix_notifications_user_email'), table_name='notifications')
    op.drop_table('notifications')
    op.drop_index(op.f('ix_incident_response_routes_created_at'), table_name='incident_response_routes')
    op.drop_index(op.f('ix_incident_response_routes_incident_report_id'), table_name='incident_response_routes')
    op.drop_table('incident_response_routes')
    op.drop_index(op.f('ix_incident_reports_created_at'), table_name='incident_reports')
    op.drop_index(op.f('ix_incident_reports_status'), table_name='incident_reports')
    op.drop_index(op.f('ix_incident_reports_reporter_email'), table_name='incident_reports')
    op.drop_table('incident_reports')
