"""Run the API with uvicorn: ``python -m radiometa``."""
import uvicorn

from radiometa.core.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "radiometa.main:app",
        host="0.0.0.0",  # nosec B104 - bound inside the container/PaaS network
        port=settings.port,
        proxy_headers=True,
        forwarded_allow_ips=settings.trusted_proxies,
    )


if __name__ == "__main__":
    main()
