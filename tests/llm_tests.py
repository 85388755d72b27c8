import asyncio
import unittest
from unittest.mock import AsyncMock, Mock, patch

from google.genai import types

from sommelier.exceptions import UpstreamError
from sommelier.services.llm import GeminiService, build_contents


class TestBuildContents(unittest.TestCase):
    def test_payload_then_question(self):
        contents = build_contents('{"catalog": []}', "Which red?")
        self.assertEqual(
            contents,
            'Here is the wine data in JSON:\n{"catalog": []}\n\nCustomer question:\nWhich red?',
        )


class TestGeminiService(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        patcher = patch("sommelier.services.llm.genai.Client")
        self.mock_client_cls = patcher.start()
        self.addCleanup(patcher.stop)

        self.service = GeminiService(
            api_key="test-key",
            model="test-model",
            timeout=0.5,
            max_output_tokens=380,
            rate_limit_calls=10,
            rate_limit_period=60,
        )
        self.generate_content = AsyncMock(return_value=Mock(text="Try the Pinot."))
        self.service.client.aio.models.generate_content = self.generate_content

    def test_client_uses_api_key(self):
        self.mock_client_cls.assert_called_once_with(api_key="test-key")

    async def test_generate_returns_text(self):
        # Execute
        answer = await self.service.generate("INSTRUCTIONS", "{}", "Which red?")

        # Assert
        self.assertEqual(answer, "Try the Pinot.")
        kwargs = self.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        self.assertEqual(kwargs["contents"], build_contents("{}", "Which red?"))
        config = kwargs["config"]
        self.assertIsInstance(config, types.GenerateContentConfig)
        self.assertEqual(config.system_instruction, "INSTRUCTIONS")
        self.assertEqual(config.max_output_tokens, 380)

    async def test_generate_overrides_token_budget(self):
        await self.service.generate("I", "{}", "Q", max_output_tokens=120)
        self.assertEqual(self.generate_content.call_args.kwargs["config"].max_output_tokens, 120)

    async def test_provider_error_becomes_upstream_error(self):
        self.generate_content.side_effect = RuntimeError("quota exceeded")

        with self.assertRaises(UpstreamError) as ctx:
            await self.service.generate("I", "{}", "Q")

        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
        self.assertIn("quota exceeded", ctx.exception.detail)
        self.assertEqual(ctx.exception.message, "Something went wrong on the server.")

    async def test_empty_text_becomes_upstream_error(self):
        for text in (None, "", "   "):
            with self.subTest(text=text):
                self.generate_content.return_value = Mock(text=text)
                with self.assertRaises(UpstreamError):
                    await self.service.generate("I", "{}", "Q")

    async def test_timeout_becomes_upstream_error(self):
        async def slow_call(**kwargs):
            await asyncio.sleep(5)

        self.generate_content.side_effect = slow_call
        self.service.timeout = 0.01

        with self.assertRaises(UpstreamError) as ctx:
            await self.service.generate("I", "{}", "Q")
        self.assertIn("timed out", ctx.exception.detail)

    async def test_exhausted_budget_becomes_upstream_error(self):
        with patch("sommelier.services.llm.genai.Client"):
            service = GeminiService(api_key="k", rate_limit_calls=2, rate_limit_period=60)
        service.client.aio.models.generate_content = AsyncMock(return_value=Mock(text="ok"))

        self.assertEqual(await service.generate("I", "{}", "Q"), "ok")
        self.assertEqual(await service.generate("I", "{}", "Q"), "ok")
        with self.assertRaises(UpstreamError) as ctx:
            await service.generate("I", "{}", "Q")

        self.assertIn("exhausted", ctx.exception.detail)
        self.assertEqual(service.client.aio.models.generate_content.await_count, 2)


if __name__ == '__main__':
    unittest.main()
