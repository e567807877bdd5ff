#!/usr/bin/env python3
"""
ChainForge Operator Bot
Deploy tokens, generate chain scaffolds and follow contract verification from Telegram

Commands:
  /token ERC721 name="Impact" symbol=IMP modules=mintable
  /chain MyChain consensus=pos modules=governance
  /deployments  /activity  /mint  /balance
"""

import asyncio
import logging

import telegram
from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from chainforge.config import ConsoleConfig, setup_logging
from chainforge.errors import ConfigurationError
from chainforge.services import ActivityLedger, BackendClient, RequestBuilder, StandardPolicy, can_trigger
from chainforge.views import DeployForm, DeploymentsPage, OperationsConsole
from chainforge.views.formatting import (
    esc,
    parse_command_text,
    render_activity,
    render_deployments,
    render_errors,
    render_scaffold_result,
    render_token_result,
)

logger = logging.getLogger(__name__)

TOKEN_HELP = (
    "<b>Deploy Token</b>\n"
    "━━━━━━━━━━━━━━━━━━━━━━\n"
    "<code>/token ERC20 name=\"Lab Token\" symbol=LAB initialSupply=1000000 decimals=18</code>\n"
    "<code>/token ERC721 name=Impact symbol=IMP baseURI=https://example.com/ modules=mintable</code>\n"
    "<code>/token ERC1155 name=Items baseURI=https://example.com/{id}.json</code>\n\n"
    "Modules: mintable, burnable, pausable, governance, accessControl, ownable, tokenTransfer, metadata"
)

CHAIN_HELP = (
    "<b>Generate Chain Scaffold</b>\n"
    "━━━━━━━━━━━━━━━━━━━━━━\n"
    "<code>/chain MyChain consensus=poa modules=governance</code>\n\n"
    "Consensus: poa (Proof of Authority) or pos (Proof of Stake)"
)

OPS_HELP = (
    "<b>Contract Operations</b>\n"
    "━━━━━━━━━━━━━━━━━━━━━━\n"
    "<code>/mint tokenType=ERC721 contractAddress=0x… contractFileName=ImpactNFT_ERC721_123.sol "
    "contractName=ImpactNFT to=0x…</code>\n"
    "<code>/balance tokenType=ERC1155 contractAddress=0x… contractFileName=Items.sol "
    "contractName=Items wallet=0x… id=1</code>\n\n"
    "ERC20 tokens are deployed with fixed supply. Minting is disabled."
)


class OperatorSession:
    """Per-chat console state: forms, deployment view and activity ledger"""

    def __init__(self, client, builder: RequestBuilder, config: ConsoleConfig):
        self.ledger = ActivityLedger(config.ledger_limit)
        self.form = DeployForm(client, builder, self.ledger)
        self.deployments = DeploymentsPage(client, privacy_mode=config.privacy_mode)
        self.operations = OperationsConsole(client)


def get_session(context: ContextTypes.DEFAULT_TYPE) -> OperatorSession:
    session = context.chat_data.get("session")
    if session is None:
        shared = context.bot_data
        session = OperatorSession(shared["client"], shared["builder"], shared["config"])
        context.chat_data["session"] = session
    return session


def to_markup(button_rows) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(label, callback_data=data) for label, data in row]
        for row in button_rows
    ])


def main_menu_markup() -> InlineKeyboardMarkup:
    return to_markup([
        [("🚀 Deploy Token", "token_help"), ("🧱 Chain Scaffold", "chain_help")],
        [("📜 Deployments", "deployments"), ("🗂 Activity", "activity")],
        [("🛠 Contract Operations", "ops_help")],
    ])


def back_markup() -> InlineKeyboardMarkup:
    return to_markup([[("🏠 Main Menu", "main_menu")]])


def command_text(update: Update) -> str:
    text = update.message.text or ""
    return text.partition(" ")[2]


async def safe_edit_message(query, message: str, reply_markup=None):
    """Edit a callback query message, tolerating unchanged or vanished messages"""
    try:
        await query.edit_message_text(
            message,
            reply_markup=reply_markup,
            parse_mode='HTML',
            disable_web_page_preview=True
        )
    except telegram.error.BadRequest as e:
        error_str = str(e)
        if "Message is not modified" in error_str:
            # Content identical, the button press was already acknowledged
            logger.debug("Message unchanged, skipping edit")
        elif "Message to edit not found" in error_str or "Message can't be edited" in error_str:
            logger.warning(f"Message no longer exists, cannot edit: {e}")
        else:
            raise


async def reply(update: Update, message: str, reply_markup=None):
    await update.message.reply_text(
        message,
        reply_markup=reply_markup,
        parse_mode='HTML',
        disable_web_page_preview=True
    )


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Send the main menu"""
    message = (
        "<b>ChainForge Operator Console 🚀</b>\n"
        "━━━━━━━━━━━━━━━━━━━━━━\n"
        "Deploy standardized token contracts, generate chain scaffolds\n"
        "and follow contract verification.\n\n"
        "Pick an action below."
    )
    if update.callback_query:
        await safe_edit_message(update.callback_query, message, main_menu_markup())
    else:
        await reply(update, message, main_menu_markup())


async def token_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/token <standard> key=value ..."""
    session = get_session(context)
    form = session.form

    try:
        positional, named = parse_command_text(command_text(update))
    except ValueError as e:
        await reply(update, f"❌ Could not read arguments: {esc(e)}")
        return

    if not positional:
        await reply(update, TOKEN_HELP, back_markup())
        return

    if form.token_busy:
        await reply(update, "⏳ A deployment is already in progress.")
        return

    try:
        form.set_token_type(positional[0])
    except ValueError:
        await reply(update, f"❌ Unknown token standard: {esc(positional[0])}\nUse ERC20, ERC721 or ERC1155.")
        return

    form.reset_token_fields()
    for name, value in named.items():
        if name == "modules":
            for module in value.split(","):
                if module.strip():
                    form.set_module(module.strip())
        else:
            form.set_token_field(name, value)

    preview = form.preview_token()
    if not preview.ok:
        await reply(update, render_errors(preview.errors))
        return

    await reply(update, f"🚀 Deploying <b>{esc(preview.request.label)}</b>…")
    result = await form.submit_token()
    if result is None:
        if form.errors:
            await reply(update, render_errors(form.errors))
        else:
            await reply(update, f"❌ {esc(form.response)}")
        return

    await reply(update, render_token_result(result), back_markup())


async def chain_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/chain <projectName> consensus=poa|pos modules=..."""
    session = get_session(context)
    form = session.form

    try:
        positional, named = parse_command_text(command_text(update))
    except ValueError as e:
        await reply(update, f"❌ Could not read arguments: {esc(e)}")
        return

    if not positional and "projectName" not in named:
        await reply(update, CHAIN_HELP, back_markup())
        return

    if form.chain_busy:
        await reply(update, "⏳ A scaffold is already being generated.")
        return

    form.chain_fields = {
        "projectName": named.get("projectName") or " ".join(positional),
        "consensusType": named.get("consensus") or named.get("consensusType"),
    }
    form.modules = {}
    for module in named.get("modules", "").split(","):
        if module.strip():
            form.set_module(module.strip())

    await reply(update, "🧱 Generating scaffold…")
    result = await form.submit_chain()
    if result is None:
        if form.errors:
            await reply(update, render_errors(form.errors))
        else:
            await reply(update, f"❌ {esc(form.response)}")
        return

    await reply(update, render_scaffold_result(result), back_markup())


async def show_deployments(update: Update, context: ContextTypes.DEFAULT_TYPE, refresh: bool = True):
    """Render the deployment history, fetching it first unless only the view changed"""
    page = get_session(context).deployments
    if refresh or not page.loaded:
        await page.load()

    message, buttons = render_deployments(page.rows, page.privacy_mode, error=page.error,
                                          alert=page.consume_alert())
    buttons.append([("🏠 Main Menu", "main_menu")])

    if update.callback_query:
        await safe_edit_message(update.callback_query, message, to_markup(buttons))
    else:
        await reply(update, message, to_markup(buttons))


async def verify_deployment(update: Update, context: ContextTypes.DEFAULT_TYPE, record_id: str):
    """Trigger verification, show progress right away, then show the refreshed list"""
    query = update.callback_query
    page = get_session(context).deployments

    # Answer before any backend call, Telegram drops answers to stale queries
    if page.is_verifying(record_id):
        await query.answer("Verification already in progress")
        return
    row = page.find_row(record_id)
    if row is None or not can_trigger(row.verification_status):
        await query.answer("No verification action available")
        return
    await query.answer("Verification requested")

    task = asyncio.create_task(page.verify(record_id))
    await asyncio.sleep(0)

    if page.is_verifying(record_id):
        message, buttons = render_deployments(page.rows, page.privacy_mode)
        buttons.append([("🏠 Main Menu", "main_menu")])
        await safe_edit_message(query, message, to_markup(buttons))

    await task
    # A failed trigger shows up as the alert line of the refreshed list
    await show_deployments(update, context, refresh=False)


async def show_activity(update: Update, context: ContextTypes.DEFAULT_TYPE):
    message = render_activity(get_session(context).ledger.latest(10))
    if update.callback_query:
        await safe_edit_message(update.callback_query, message, back_markup())
    else:
        await reply(update, message, back_markup())


async def _operation_command(update: Update, context: ContextTypes.DEFAULT_TYPE, operation: str):
    console = get_session(context).operations
    try:
        _, named = parse_command_text(command_text(update))
    except ValueError as e:
        await reply(update, f"❌ Could not read arguments: {esc(e)}")
        return

    if not named:
        await reply(update, OPS_HELP, back_markup())
        return

    if console.busy:
        await reply(update, "⏳ Another contract operation is in progress.")
        return

    console.set_field("tokenType", named.pop("tokenType", "ERC20"))
    for name, value in named.items():
        console.set_field(name, value)

    if operation == "mint":
        await console.mint()
        await reply(update, esc(console.mint_status))
    else:
        await console.check_balance()
        await reply(update, f"💰 Balance: {esc(console.balance)}")


async def mint_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _operation_command(update, context, "mint")


async def balance_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _operation_command(update, context, "balance")


async def deployments_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await show_deployments(update, context)


async def button_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle button presses"""
    query = update.callback_query
    data = query.data or ""

    if data.startswith("verify:"):
        await verify_deployment(update, context, data.partition(":")[2])
        return

    await query.answer()

    if data == "main_menu":
        await start(update, context)
    elif data == "deployments":
        await show_deployments(update, context)
    elif data == "privacy":
        get_session(context).deployments.toggle_privacy()
        await show_deployments(update, context, refresh=False)
    elif data == "activity":
        await show_activity(update, context)
    elif data == "token_help":
        await safe_edit_message(query, TOKEN_HELP, back_markup())
    elif data == "chain_help":
        await safe_edit_message(query, CHAIN_HELP, back_markup())
    elif data == "ops_help":
        await safe_edit_message(query, OPS_HELP, back_markup())


def main():
    """Start the bot"""
    try:
        config = ConsoleConfig.from_env()
    except ConfigurationError as e:
        print(f"❌ CONFIGURATION ERROR: {e}")
        return

    setup_logging(config.log_level)

    if not config.telegram_token:
        print("❌ TELEGRAM_OPERATOR_BOT not set in .env!")
        print("1. Create a bot with @BotFather on Telegram")
        print("2. Add the token to .env")
        return

    try:
        client = BackendClient(config)
    except ConfigurationError as e:
        print(f"❌ {e}")
        return

    application = Application.builder().token(config.telegram_token).build()
    application.bot_data.update({
        "config": config,
        "client": client,
        "builder": RequestBuilder(StandardPolicy.from_config(config)),
    })

    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("token", token_command))
    application.add_handler(CommandHandler("chain", chain_command))
    application.add_handler(CommandHandler("deployments", deployments_command))
    application.add_handler(CommandHandler("activity", show_activity))
    application.add_handler(CommandHandler("mint", mint_command))
    application.add_handler(CommandHandler("balance", balance_command))
    application.add_handler(CallbackQueryHandler(button_callback))

    print("🤖 ChainForge Operator Bot Started!")
    print(f"🔗 Backend: {config.api_base_url}")
    print(f"📋 ERC1155 symbol: {config.erc1155_symbol} | Modules: {config.module_scope}")
    print("📱 Commands: /start /token /chain /deployments /activity /mint /balance")
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == '__main__':
    main()
