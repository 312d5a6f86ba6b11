from shortkeys.models.url_record_model import UrlRecordModel


__all__ = ['UrlRecordModel']
