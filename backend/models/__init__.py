from models.accounts import Account
from models.transaction_evidence import TransactionEvidence
from models.general_journal import GeneralJournal, GeneralJournalLine
from models.adjusting_journal import AdjustingJournal, AdjustingJournalLine

__all__ = ['Account', 'AdjustingJournal', 'AdjustingJournalLine', 'GeneralJournal', 'GeneralJournalLine', 'TransactionEvidence',]
