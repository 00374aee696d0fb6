"""
Dependency Injection Containers

구성:
- InfrastructureContainer: Settings 주입 + BithumbClient(Resource) + nonce 생성기
- ApplicationContainer: TradingService, aiohttp 애플리케이션

주요 패턴:
- Resource Provider: async init/shutdown 자동 관리 (aiohttp 세션)
- Object Provider: settings.py 싱글톤 주입
- Singleton Provider: 프로세스 단위 nonce 생성기

사용 예시:
    container = ApplicationContainer()
    await container.init_resources()
    app = await container.web_app()
    ...
    await container.shutdown_resources()
"""

from dependency_injector import containers, providers

from bithumb_relay.application.api import create_app
from bithumb_relay.application.trading_service import TradingService
from bithumb_relay.config.init_infra import init_bithumb_client
from bithumb_relay.config.settings import bithumb_settings, server_settings
from bithumb_relay.core.signing.nonce import nonce_source_for


class InfrastructureContainer(containers.DeclarativeContainer):
    """인프라 컨테이너

    - 빗썸 REST 클라이언트 (aiohttp 세션 공유)
    - Settings: settings.py 싱글톤 주입 (DI)
    """

    bithumb_config = providers.Object(bithumb_settings)

    nonce_source = providers.Singleton(
        nonce_source_for,
        strategy=bithumb_config.provided.nonce_strategy,
    )

    bithumb_client = providers.Resource(
        init_bithumb_client,
        base_url=bithumb_config.provided.base_url,
        timeout=bithumb_config.provided.timeout_sec,
        nonce_source=nonce_source,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """최상위 컨테이너"""

    server_config = providers.Object(server_settings)

    infra = providers.Container(InfrastructureContainer)

    trading_service = providers.Singleton(
        TradingService,
        client=infra.bithumb_client,
    )

    web_app = providers.Singleton(
        create_app,
        service=trading_service,
        static_dir=server_config.provided.static_dir,
    )
