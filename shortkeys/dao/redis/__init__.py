from shortkeys.dao.redis.redis_key_schema import RedisKeySchema
from shortkeys.dao.redis.url_record_redis_dao import UrlRecordRedisDAO
from shortkeys.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'UrlRecordRedisDAO',
    'RedisClientMixin',
]
