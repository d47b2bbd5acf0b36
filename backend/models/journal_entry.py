from sqlalchemy import Column, Integer, String, Date, Text, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import declared_attr, relationship
from models.audit_mixin import TimestampMixin


class JournalHeaderMixin(TimestampMixin):
    """Columns shared by the General and Adjusting journal headers.

    ``version`` is SQLAlchemy's version counter: every UPDATE/DELETE of a
    header is conditioned on the version that was read, so two writers racing
    on the same entry cannot silently overwrite each other.
    """
    id = Column(Integer, primary_key=True, index=True)
    tanggal = Column(Date, nullable=False, index=True)
    deskripsi_transaksi = Column(Text, nullable=False)
    version = Column(Integer, nullable=False, default=1)

    @declared_attr
    def __mapper_args__(cls):
        return {"version_id_col": cls.version}


class JournalLineMixin(TimestampMixin):
    """Columns shared by the General and Adjusting journal detail lines.

    Concrete classes set ``__header_table__`` to the owning header table.
    """
    __header_table__ = None

    id = Column(Integer, primary_key=True, index=True)
    debet = Column(Numeric(18, 2), nullable=False, default=0)
    kredit = Column(Numeric(18, 2), nullable=False, default=0)

    @declared_attr
    def journal_id(cls):
        return Column(
            Integer,
            ForeignKey(f"{cls.__header_table__}.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )

    @declared_attr
    def account_id(cls):
        return Column(String(20), ForeignKey("accounts.nomor_akun"), nullable=False, index=True)

    @declared_attr
    def account(cls):
        return relationship("Account", lazy="joined")

    @declared_attr
    def __table_args__(cls):
        return (
            CheckConstraint("debet >= 0", name=f"ck_{cls.__tablename__}_debet_non_negative"),
            CheckConstraint("kredit >= 0", name=f"ck_{cls.__tablename__}_kredit_non_negative"),
        )
