"""
Operator bot handlers driven with stand-in Telegram objects
"""

import asyncio
from types import SimpleNamespace

import telegram_operator_bot as bot
from chainforge.config import ConsoleConfig

from conftest import SAMPLE_RECORDS

FAILED_ID = SAMPLE_RECORDS[0]["file"]


class FakeMessage:
    def __init__(self, text=""):
        self.text = text
        self.replies = []

    async def reply_text(self, text, **kwargs):
        self.replies.append((text, kwargs.get("reply_markup")))


class FakeQuery:
    def __init__(self, data):
        self.data = data
        self.edits = []
        self.answers = []

    async def answer(self, text=None, show_alert=False):
        self.answers.append((text, show_alert))

    async def edit_message_text(self, text, **kwargs):
        self.edits.append((text, kwargs.get("reply_markup")))


def _context(backend, builder):
    return SimpleNamespace(chat_data={}, bot_data={
        "config": ConsoleConfig(api_base_url="http://localhost:4000"),
        "client": backend,
        "builder": builder,
    })


def _callbacks(markup):
    return [button.callback_data for row in markup.inline_keyboard for button in row]


def test_session_is_per_chat(backend, builder):
    context = _context(backend, builder)
    session = bot.get_session(context)
    assert bot.get_session(context) is session
    assert session.ledger.limit == 50
    assert session.deployments.privacy_mode is True


def test_to_markup():
    markup = bot.to_markup([[("🔄 Refresh", "deployments"), ("👁 Privacy Off", "privacy")]])
    assert _callbacks(markup) == ["deployments", "privacy"]


def test_token_command_deploys(backend, builder):
    context = _context(backend, builder)
    message = FakeMessage('/token ERC721 name="Impact" symbol=IMP modules=mintable')
    update = SimpleNamespace(message=message, callback_query=None)

    asyncio.run(bot.token_command(update, context))

    assert message.replies[0][0] == "🚀 Deploying <b>Impact (ERC721)</b>…"
    assert "0x" + "ab" * 20 in message.replies[1][0]
    assert backend.count("create_token") == 1
    assert bot.get_session(context).ledger.entries()[0].label == "Deployment completed: Impact (ERC721)"


def test_token_command_reports_validation_errors(backend, builder):
    context = _context(backend, builder)
    message = FakeMessage("/token ERC20 name=Lab")
    update = SimpleNamespace(message=message, callback_query=None)

    asyncio.run(bot.token_command(update, context))

    assert message.replies[0][0].startswith("❌ <b>Please fix the following:</b>")
    assert backend.calls == []


def test_verify_button_shows_progress_then_refreshed_list(backend, builder):
    context = _context(backend, builder)

    async def scenario():
        listing = FakeQuery("deployments")
        await bot.button_callback(SimpleNamespace(callback_query=listing, message=None), context)
        assert f"verify:{FAILED_ID}" in _callbacks(listing.edits[-1][1])

        query = FakeQuery(f"verify:{FAILED_ID}")
        await bot.button_callback(SimpleNamespace(callback_query=query, message=None), context)
        return query

    query = asyncio.run(scenario())

    progress_text, progress_markup = query.edits[0]
    assert "🔄" in progress_text
    assert f"verify:{FAILED_ID}" not in _callbacks(progress_markup)
    assert query.answers == [("Verification requested", False)]
    assert backend.count("verify_contract") == 1
    assert backend.count("list_deployments") == 2


def _press(context, data):
    query = FakeQuery(data)
    return query, bot.button_callback(SimpleNamespace(callback_query=query, message=None), context)


def test_verify_press_is_answered_before_the_backend_call(backend, builder):
    context = _context(backend, builder)
    answered_while_in_flight = []

    async def scenario():
        _, press = _press(context, "deployments")
        await press
        query, press = _press(context, f"verify:{FAILED_ID}")
        backend.on_verify = lambda record_id: answered_while_in_flight.append(list(query.answers))
        await press
        return query

    query = asyncio.run(scenario())

    assert answered_while_in_flight == [[("Verification requested", False)]]
    assert len(query.answers) == 1


def test_failed_verify_alert_is_shown_once(backend, builder, transport_error):
    context = _context(backend, builder)
    backend.fail["verify_contract"] = transport_error

    async def scenario():
        _, press = _press(context, "deployments")
        await press
        verify_query, press = _press(context, f"verify:{FAILED_ID}")
        await press
        privacy_query, press = _press(context, "privacy")
        await press
        return verify_query, privacy_query

    verify_query, privacy_query = asyncio.run(scenario())

    assert "⚠️ Verification request failed." in verify_query.edits[-1][0]
    assert "Verification request failed." not in privacy_query.edits[-1][0]


def test_verify_press_on_verified_row(backend, builder):
    context = _context(backend, builder)

    async def scenario():
        _, press = _press(context, "deployments")
        await press
        query, press = _press(context, f"verify:{SAMPLE_RECORDS[1]['file']}")
        await press
        return query

    query = asyncio.run(scenario())

    assert query.answers == [("No verification action available", False)]
    assert backend.count("verify_contract") == 0
