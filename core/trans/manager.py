from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from core.trans.providers import PROVIDER_CHAIN, Provider, provider_names
from handlers.async_comm import AsyncHttp
from models.translation_models import Failure, ProviderOutcome, Skipped, TranslationRequest, TranslationResult
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Sequence

    from models.config_models import Config


__all__: list[str] = ["TransManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TransManager:
    """Best-effort translation through an ordered chain of providers.

    Providers are tried one after another for each text; the first usable translation wins.
    When every provider fails the original text is returned, so none of the public
    translation methods raise for provider problems.

    Attributes:
        config (Config): Service configuration.
        http (AsyncHttp): HTTP client shared by all provider calls.
        providers (tuple[Provider, ...]): The provider chain in priority order.
        disabled (frozenset[str]): Names of chain members switched off in the configuration.
    """

    def __init__(self, config: Config, http: AsyncHttp | None = None) -> None:
        """Resolve the enabled providers and prepare the HTTP client.

        Args:
            config (Config): Configuration with a TRANSLATION section.
            http (AsyncHttp | None): HTTP client to use. A new one sending the configured
                User-Agent is created when omitted.
        """
        self.config: Config = config
        self.http: AsyncHttp = http or AsyncHttp(default_headers={"User-Agent": config.TRANSLATION.USER_AGENT})
        self.providers: tuple[Provider, ...] = PROVIDER_CHAIN
        self.disabled: frozenset[str] = self._resolve_disabled(config.TRANSLATION.PROVIDERS)
        logger.debug("Enabled translation providers: %s", self.enabled_providers)

    @staticmethod
    def _resolve_disabled(enabled: Sequence[str]) -> frozenset[str]:
        """Work out which chain members the configuration leaves out.

        The configured order is ignored; the chain order always decides priority.
        """
        wanted: set[str] = {name.strip().lower() for name in enabled}
        known: list[str] = provider_names()
        unknown: list[str] = sorted(wanted - set(known))
        if unknown:
            logger.warning("Ignoring unknown translation providers: %s", unknown)

        disabled: frozenset[str] = frozenset(name for name in known if name not in wanted)
        if len(disabled) == len(known):
            logger.warning("No translation providers enabled; texts will be returned untranslated.")
        return disabled

    @property
    def enabled_providers(self) -> list[str]:
        return [p.name for p in self.providers if p.name not in self.disabled]

    async def initialize(self) -> None:
        """Open the HTTP session. Must run inside the event loop that will serve requests."""
        logger.info("TransManager initialization started")
        self.http.initialize_session()
        for name in self.enabled_providers:
            logger.info("Translation provider enabled: '%s'", name)

    async def shutdown(self) -> None:
        logger.info("Class '%s' termination process started.", self.__class__.__name__)
        await self.http.close()
        logger.info("Class '%s' termination process completed.", self.__class__.__name__)

    async def _call_provider(self, provider: Provider, text: str, tgt_lang: str) -> ProviderOutcome:
        if provider.name in self.disabled:
            return Skipped(reason="disabled in configuration")
        try:
            return await provider.call(self.http, text, tgt_lang, self.config.TRANSLATION)
        except Exception as err:  # noqa: BLE001
            # Adapters report their own failures; anything reaching here is a bug in one of them.
            logger.warning("Provider '%s' raised unexpectedly: %r", provider.name, err)
            return Failure(reason=repr(err))

    async def translate(self, text: str, tgt_lang: str) -> TranslationResult:
        """Translate one text, falling back through the provider chain.

        English targets and blank texts are returned immediately without a network call.

        Args:
            text (str): Text to translate.
            tgt_lang (str): ISO 639-1 target language code.

        Returns:
            TranslationResult: Translated text, or the original text with used_fallback=True.
        """
        request = TranslationRequest(text=text, target_lang=tgt_lang)
        if request.is_identity:
            return TranslationResult(text=text)

        source: str = text.strip()
        for provider in self.providers:
            outcome: ProviderOutcome = await self._call_provider(provider, source, tgt_lang)
            logger.debug("Provider '%s' outcome: %s", provider.name, outcome)
            if outcome.is_success:
                logger.debug("Translated by '%s' to '%s': %s", provider.name, tgt_lang, StringUtils.preview(text))
                return TranslationResult(text=outcome.text, provider=provider.name)  # type: ignore[union-attr]

        logger.warning("Translation failed for text: '%s' to %s", StringUtils.preview(text), tgt_lang)
        return TranslationResult(text=text, used_fallback=True)

    async def translate_one(self, text: str, tgt_lang: str) -> str:
        """Translate one text and return only the resulting string.

        Returns:
            str: The translation, or `text` unchanged.
        """
        result: TranslationResult = await self.translate(text, tgt_lang)
        return result.text

    async def translate_batch(self, texts: Sequence[str], tgt_lang: str) -> list[str]:
        """Translate texts one by one, keeping order and isolating failures.

        Items run sequentially with `BATCH_DELAY` seconds between consecutive requests.
        An item whose translation raises keeps its original text.

        Args:
            texts (Sequence[str]): Texts in the order they should come back.
            tgt_lang (str): ISO 639-1 target language code.

        Returns:
            list[str]: One entry per input text, in the same order.
        """
        if not texts:
            return []

        if tgt_lang == "en":
            return list(texts)

        delay: float = self.config.TRANSLATION.BATCH_DELAY
        try:
            translations: list[str] = []
            last: int = len(texts) - 1
            for index, text in enumerate(texts):
                try:
                    translations.append(await self.translate_one(text, tgt_lang))
                except Exception as err:  # noqa: BLE001
                    logger.warning("Translation failed for text %d: %s", index + 1, err)
                    translations.append(text)
                if index < last:
                    await asyncio.sleep(delay)
        except Exception:
            logger.exception("Batch translation error")
            return list(texts)
        return translations
