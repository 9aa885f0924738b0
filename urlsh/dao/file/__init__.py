from urlsh.dao.file.short_url_file_dao import ShortURLFileDAO
from urlsh.dao.file.document import compute_stats, store_from_document, store_to_document


__all__ = [
    'ShortURLFileDAO',
    'compute_stats',
    'store_from_document',
    'store_to_document',
]
