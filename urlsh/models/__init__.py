from urlsh.models.short_url_model import ShortURLModel
from urlsh.models.store_model import StoreModel


__all__ = [
    'ShortURLModel',
    'StoreModel',
]
