"""initial_portal_schema

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-17 09:12:44.201733

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a9d7b10'
down_revision = None
branch_labels = None
depends_on = None


def _user_fk(nullable=False, ondelete='CASCADE'):
    return sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete=ondelete), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(200), nullable=True),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('department', sa.String(200), nullable=True),
        sa.Column('position', sa.String(200), nullable=True),
        sa.Column('avatar', sa.String(500), nullable=True),
        sa.Column('storage_quota', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    # Mural
    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_urgent', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_posts_id', 'posts', ['id'])
    op.create_index('ix_posts_user_id', 'posts', ['user_id'])
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])

    op.create_table(
        'post_attachments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('filename', sa.String(500), nullable=False),
        sa.Column('original_name', sa.String(500), nullable=False),
        sa.Column('file_type', sa.String(200), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('is_image', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_post_attachments_id', 'post_attachments', ['id'])
    op.create_index('ix_post_attachments_post_id', 'post_attachments', ['post_id'])

    op.create_table(
        'post_likes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        _user_fk(),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('post_id', 'user_id', name='uq_post_likes_post_user'),
    )
    op.create_index('ix_post_likes_id', 'post_likes', ['id'])
    op.create_index('ix_post_likes_post_id', 'post_likes', ['post_id'])

    op.create_table(
        'post_comments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        _user_fk(),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_post_comments_id', 'post_comments', ['id'])
    op.create_index('ix_post_comments_post_id', 'post_comments', ['post_id'])

    # Calendar
    op.create_table(
        'calendar_events',
        sa.Column('id', sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column('title', sa.String(300), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('event_date', sa.Date(), nullable=False),
        sa.Column('event_end_date', sa.Date(), nullable=True),
        sa.Column('event_time', sa.Time(), nullable=True),
        sa.Column('event_end_time', sa.Time(), nullable=True),
        sa.Column('visibility', sa.String(20), nullable=False),
        sa.Column('event_type', sa.String(50), nullable=False),
        sa.Column('meeting_link', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_calendar_events_id', 'calendar_events', ['id'])
    op.create_index('ix_calendar_events_user_id', 'calendar_events', ['user_id'])
    op.create_index('ix_calendar_events_created_at', 'calendar_events', ['created_at'])

    op.create_table(
        'event_shares',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('calendar_events.id', ondelete='CASCADE'), nullable=False),
        _user_fk(),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('event_id', 'user_id', name='uq_event_shares_event_user'),
    )
    op.create_index('ix_event_shares_id', 'event_shares', ['id'])
    op.create_index('ix_event_shares_event_id', 'event_shares', ['event_id'])
    op.create_index('ix_event_shares_user_id', 'event_shares', ['user_id'])

    # Drive
    op.create_table(
        'user_folders',
        sa.Column('id', sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column('parent_id', sa.Integer(), sa.ForeignKey('user_folders.id', ondelete='CASCADE'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_user_folders_id', 'user_folders', ['id'])
    op.create_index('ix_user_folders_user_id', 'user_folders', ['user_id'])
    op.create_index('ix_user_folders_parent_id', 'user_folders', ['parent_id'])

    op.create_table(
        'folder_shares',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('folder_id', sa.Integer(), sa.ForeignKey('user_folders.id', ondelete='CASCADE'), nullable=False),
        _user_fk(),
        sa.Column('permission', sa.String(10), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('folder_id', 'user_id', name='uq_folder_shares_folder_user'),
    )
    op.create_index('ix_folder_shares_id', 'folder_shares', ['id'])
    op.create_index('ix_folder_shares_folder_id', 'folder_shares', ['folder_id'])
    op.create_index('ix_folder_shares_user_id', 'folder_shares', ['user_id'])

    op.create_table(
        'user_files',
        sa.Column('id', sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column('folder_id', sa.Integer(), sa.ForeignKey('user_folders.id', ondelete='CASCADE'), nullable=True),
        sa.Column('filename', sa.String(500), nullable=False),
        sa.Column('original_name', sa.String(500), nullable=False),
        sa.Column('file_type', sa.String(200), nullable=True),
        sa.Column('file_size', sa.BigInteger(), nullable=False),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_user_files_id', 'user_files', ['id'])
    op.create_index('ix_user_files_user_id', 'user_files', ['user_id'])
    op.create_index('ix_user_files_folder_id', 'user_files', ['folder_id'])

    # Projects
    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(30), nullable=False),
        sa.Column('priority', sa.String(20), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('visibility', sa.String(20), nullable=False),
        sa.Column('color', sa.String(20), nullable=False),
        sa.Column('is_archived', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_projects_id', 'projects', ['id'])
    op.create_index('ix_projects_owner_id', 'projects', ['owner_id'])

    op.create_table(
        'project_members',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        _user_fk(),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('joined_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('project_id', 'user_id', name='uq_project_members_project_user'),
    )
    op.create_index('ix_project_members_id', 'project_members', ['id'])
    op.create_index('ix_project_members_project_id', 'project_members', ['project_id'])
    op.create_index('ix_project_members_user_id', 'project_members', ['user_id'])

    op.create_table(
        'project_tasks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(300), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('assigned_to', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('priority', sa.String(20), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('estimated_hours', sa.Float(), nullable=True),
        sa.Column('actual_hours', sa.Float(), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_project_tasks_id', 'project_tasks', ['id'])
    op.create_index('ix_project_tasks_project_id', 'project_tasks', ['project_id'])

    op.create_table(
        'task_assignees',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('task_id', sa.Integer(), sa.ForeignKey('project_tasks.id', ondelete='CASCADE'), nullable=False),
        _user_fk(),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('task_id', 'user_id', name='uq_task_assignees_task_user'),
    )
    op.create_index('ix_task_assignees_id', 'task_assignees', ['id'])
    op.create_index('ix_task_assignees_task_id', 'task_assignees', ['task_id'])
    op.create_index('ix_task_assignees_user_id', 'task_assignees', ['user_id'])

    op.create_table(
        'task_subtasks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('task_id', sa.Integer(), sa.ForeignKey('project_tasks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(300), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_task_subtasks_id', 'task_subtasks', ['id'])
    op.create_index('ix_task_subtasks_task_id', 'task_subtasks', ['task_id'])

    op.create_table(
        'task_comments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('task_id', sa.Integer(), sa.ForeignKey('project_tasks.id', ondelete='CASCADE'), nullable=False),
        _user_fk(),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_task_comments_id', 'task_comments', ['id'])
    op.create_index('ix_task_comments_task_id', 'task_comments', ['task_id'])

    # Dashboard
    op.create_table(
        'user_shortcuts',
        sa.Column('id', sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('url', sa.String(1000), nullable=False),
        sa.Column('icon_name', sa.String(50), nullable=False),
        sa.Column('color', sa.String(50), nullable=False),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_user_shortcuts_id', 'user_shortcuts', ['id'])
    op.create_index('ix_user_shortcuts_user_id', 'user_shortcuts', ['user_id'])

    op.create_table(
        'system_shortcuts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('url', sa.String(1000), nullable=False),
        sa.Column('icon_name', sa.String(50), nullable=False),
        sa.Column('color', sa.String(50), nullable=False),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_system_shortcuts_id', 'system_shortcuts', ['id'])

    op.create_table(
        'todos',
        sa.Column('id', sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column('text', sa.String(500), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_todos_id', 'todos', ['id'])
    op.create_index('ix_todos_user_id', 'todos', ['user_id'])

    op.create_table(
        'user_notes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_user_notes_id', 'user_notes', ['id'])

    op.create_table(
        'system_settings',
        sa.Column('key', sa.String(100), primary_key=True),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('link', sa.String(200), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_notifications_id', 'notifications', ['id'])
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])


def downgrade() -> None:
    # Children before parents
    for table in (
        'notifications',
        'system_settings',
        'user_notes',
        'todos',
        'system_shortcuts',
        'user_shortcuts',
        'task_comments',
        'task_subtasks',
        'task_assignees',
        'project_tasks',
        'project_members',
        'projects',
        'user_files',
        'folder_shares',
        'user_folders',
        'event_shares',
        'calendar_events',
        'post_comments',
        'post_likes',
        'post_attachments',
        'posts',
        'users',
    ):
        op.drop_table(table)
