from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorCollection


def get_products_collection(request: Request) -> AsyncIOMotorCollection:
    return request.app.state.products_collection
