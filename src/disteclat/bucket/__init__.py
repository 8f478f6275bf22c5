from disteclat.bucket.balancer import BucketLoadBalancer
from disteclat.bucket.cache import BucketFileCache
from disteclat.bucket.registry import Bucket, BucketRegistry

__all__ = ["Bucket", "BucketFileCache", "BucketLoadBalancer", "BucketRegistry"]
