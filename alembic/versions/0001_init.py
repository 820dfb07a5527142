from alembic import op
import sqlalchemy as sa

revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    ]


def _soft_delete():
    return [
        sa.Column('deleted', sa.Boolean, nullable=False, server_default=sa.false(), index=True),
        sa.Column('deleted_at', sa.DateTime, nullable=True),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(100), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='customer'),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'tables',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('number', sa.String(20), nullable=False),
        sa.Column('capacity', sa.Integer, nullable=False),
        sa.Column('location', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='available'),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'menu',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('category', sa.String(30), nullable=False),
        sa.Column('image_url', sa.String(255), nullable=True),
        sa.Column('rating', sa.Float, nullable=False, server_default='0'),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'ingredients',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True, index=True),
        sa.Column('description', sa.Text, nullable=False, server_default=''),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'inventory',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('ingredient_id', sa.String(36), sa.ForeignKey('ingredients.id'), nullable=False, index=True),
        sa.Column('quantity', sa.Float, nullable=False, server_default='0'),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'recipes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('menu_id', sa.String(36), sa.ForeignKey('menu.id'), nullable=False, index=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text, nullable=False, server_default=''),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'recipe_ingredients',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('recipe_id', sa.String(36), sa.ForeignKey('recipes.id'), nullable=False, index=True),
        sa.Column('ingredient_id', sa.String(36), sa.ForeignKey('ingredients.id'), nullable=False),
        sa.Column('quantity', sa.Float, nullable=False),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
        sa.UniqueConstraint('recipe_id', 'ingredient_id', name='uq_recipe_ingredient'),
    )
    op.create_table(
        'reservations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('table_id', sa.String(36), sa.ForeignKey('tables.id'), nullable=False, index=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('reservation_date', sa.Date, nullable=False, index=True),
        sa.Column('reservation_time', sa.Time, nullable=False),
        sa.Column('number_of_guests', sa.Integer, nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'orders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('payment_method', sa.String(50), nullable=True),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='unpaid'),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'order_menu',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_id', sa.String(36), sa.ForeignKey('orders.id'), nullable=False, index=True),
        sa.Column('menu_id', sa.String(36), sa.ForeignKey('menu.id'), nullable=False),
        sa.Column('quantity', sa.Integer, nullable=False),
    )
    op.create_table(
        'reviews',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('rating', sa.Integer, nullable=False),
        sa.Column('comment', sa.String(100), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('menu_id', sa.String(36), sa.ForeignKey('menu.id'), nullable=False, index=True),
        sa.Column('order_id', sa.String(36), sa.ForeignKey('orders.id'), nullable=False),
        *_timestamps(),
    )


def downgrade():
    for table in (
        'reviews', 'order_menu', 'orders', 'reservations', 'recipe_ingredients',
        'recipes', 'inventory', 'ingredients', 'menu', 'tables', 'users',
    ):
        op.drop_table(table)
