import uvicorn

from batepapo.core.config import settings


def main():
    uvicorn.run("batepapo.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
