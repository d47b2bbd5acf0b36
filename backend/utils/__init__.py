from .errors import LedgerError
from .responses import send_response, pagination_meta

__all__ = ['LedgerError', 'pagination_meta', 'send_response']
