import uvicorn

from patient_store.bootstrap import bootstrap


def main() -> None:
    fastapi_app, settings = bootstrap()

    uvicorn.run(
        fastapi_app,
        host=settings['host'],
        port=settings['port'],
        access_log=False,
    )


if __name__ == '__main__':
    main()
