from shortkeys.dao.base import UrlRecordBaseDAO


__all__ = ['UrlRecordBaseDAO']
