"""Create companies and stations

Revision ID: 001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

# BIGINT keys; SQLite only autoincrements an INTEGER PRIMARY KEY
ID_TYPE = sa.BigInteger().with_variant(sa.Integer(), 'sqlite')


def upgrade():
    op.create_table(
        'companies',
        sa.Column('id', ID_TYPE, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column(
            'parent_company_id',
            ID_TYPE,
            sa.ForeignKey('companies.id', ondelete='CASCADE'),
            nullable=True,
        ),
    )
    op.create_index('ix_companies_parent_company_id', 'companies', ['parent_company_id'])

    op.create_table(
        'stations',
        sa.Column('id', ID_TYPE, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column(
            'company_id',
            ID_TYPE,
            sa.ForeignKey('companies.id', ondelete='CASCADE'),
            nullable=False,
        ),
    )
    op.create_index('ix_stations_company_id', 'stations', ['company_id'])
    op.create_index('idx_stations_location', 'stations', ['latitude', 'longitude'])


def downgrade():
    op.drop_index('idx_stations_location', 'stations')
    op.drop_index('ix_stations_company_id', 'stations')
    op.drop_table('stations')
    op.drop_index('ix_companies_parent_company_id', 'companies')
    op.drop_table('companies')
