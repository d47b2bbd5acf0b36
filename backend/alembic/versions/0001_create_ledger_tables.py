"""create ledger tables

Revision ID: 0001_create_ledger_tables
Revises:
Create Date: 2025-06-19 15:54:30.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_create_ledger_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def _journal_tables(header_table: str, line_table: str, reference_column: sa.Column) -> None:
    op.create_table(
        header_table,
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tanggal', sa.Date(), nullable=False),
        sa.Column('deskripsi_transaksi', sa.Text(), nullable=False),
        reference_column,
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(),
    )
    op.create_index(f'ix_{header_table}_id', header_table, ['id'])
    op.create_index(f'ix_{header_table}_tanggal', header_table, ['tanggal'])
    op.create_index(f'ix_{header_table}_{reference_column.name}', header_table, [reference_column.name])

    op.create_table(
        line_table,
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('journal_id', sa.Integer(), sa.ForeignKey(f'{header_table}.id', ondelete='CASCADE'), nullable=False),
        sa.Column('account_id', sa.String(20), sa.ForeignKey('accounts.nomor_akun'), nullable=False),
        sa.Column('debet', sa.Numeric(18, 2), nullable=False, server_default='0'),
        sa.Column('kredit', sa.Numeric(18, 2), nullable=False, server_default='0'),
        *_timestamps(),
        sa.CheckConstraint('debet >= 0', name=f'ck_{line_table}_debet_non_negative'),
        sa.CheckConstraint('kredit >= 0', name=f'ck_{line_table}_kredit_non_negative'),
    )
    op.create_index(f'ix_{line_table}_id', line_table, ['id'])
    op.create_index(f'ix_{line_table}_journal_id', line_table, ['journal_id'])
    op.create_index(f'ix_{line_table}_account_id', line_table, ['account_id'])


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nomor_akun', sa.String(20), nullable=False),
        sa.Column('nama_akun', sa.String(100), nullable=False),
        sa.Column('kelompok_akun', sa.String(50), nullable=False),
        sa.Column('posisi_saldo_normal', sa.String(10), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_accounts_id', 'accounts', ['id'])
    op.create_index('ix_accounts_nomor_akun', 'accounts', ['nomor_akun'], unique=True)

    op.create_table(
        'transaction_evidence',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('no_bukti', sa.String(50), nullable=False),
        sa.Column('tanggal_transaksi', sa.Date(), nullable=False),
        sa.Column('deskripsi', sa.Text(), nullable=True),
        sa.Column('referensi', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_transaction_evidence_id', 'transaction_evidence', ['id'])
    op.create_index('ix_transaction_evidence_no_bukti', 'transaction_evidence', ['no_bukti'], unique=True)

    _journal_tables(
        'general_journals',
        'general_journal_lines',
        sa.Column('evidence_ref', sa.String(50), sa.ForeignKey('transaction_evidence.no_bukti'), nullable=True),
    )
    _journal_tables(
        'adjusting_journals',
        'adjusting_journal_lines',
        sa.Column('no_bukti_penyesuaian', sa.String(50), nullable=True),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('adjusting_journal_lines')
    op.drop_table('adjusting_journals')
    op.drop_table('general_journal_lines')
    op.drop_table('general_journals')
    op.drop_table('transaction_evidence')
    op.drop_table('accounts')
