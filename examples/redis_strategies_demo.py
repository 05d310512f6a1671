#!/usr/bin/env python3
"""
Redis Strategies Example
========================

Shows the three storage strategies against a local Redis server:
flat string keys, single hash fields, and whole-bucket reads.

Usage:
    python redis_strategies_demo.py  # needs Redis on localhost:6379
"""

from dataclasses import dataclass

import redis

from cachedriver import RedisDriver, create_driver_config


@dataclass
class UserProfile:
    user_id: int
    name: str
    email: str


def main():
    client = redis.Redis(host="localhost", port=6379, socket_timeout=5)
    driver = RedisDriver(client, config=create_driver_config(hash_delimiter="#"))

    hash_params = {"strategy": "hash"}
    postfix = RedisDriver.get_id_postfix_by_strategy(hash_params)

    # One bucket, one field per user; the ttl covers the whole bucket
    for user_id, name in [(1, "Alice"), (2, "Bob"), (3, "Carol")]:
        profile = UserProfile(user_id, name, f"{name.lower()}@example.com")
        driver.set(f"demo:users{postfix}{user_id}", profile, 600, hash_params)

    print("Single field:", driver.get(f"demo:users{postfix}2", hash_params))
    print("Some fields: ", driver.get("demo:users", {**hash_params, "fields": ["1", "3", "9"]}))
    print("Whole bucket:", driver.get("demo:users", hash_params))

    # Flat string key with its own expiry
    string_params = {"strategy": "string"}
    driver.set("demo:settings", {"theme": "dark"}, 60, string_params)
    print("String key:  ", driver.get("demo:settings", string_params))

    driver.delete(f"demo:users{postfix}*", hash_params)
    driver.delete("demo:settings", string_params)
    print("After delete:", driver.get("demo:users", hash_params))


if __name__ == "__main__":
    main()
