import asyncio
import os

import discord
from discord.ext import commands
from config.defaults import COMMAND_PREFIX
from config.defaults import DEFAULT_ALLOWED_CHANNEL_IDS
from config.defaults import DEFAULT_REDIS_URL
from config.defaults import DEFAULT_STORE_BACKEND
from config.defaults import DEFAULT_STORE_TIMEOUT_SECONDS
from config.env import env_float
from config.env import env_str
from config.env import resolve_allowed_channel_ids
from learn.connect import open_list_store
from learn.replies import load_reply_templates
from misc.messaging import send_chunked
from misc.runtime_wiring import wire_bot_runtime

# =========================
# ENV
# =========================
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")

if not DISCORD_TOKEN:
    raise RuntimeError("Missing DISCORD_TOKEN env var")

# =========================
# STORE
# =========================
STORE_BACKEND = env_str("LEARNDB_STORE_BACKEND", DEFAULT_STORE_BACKEND).lower()
REDIS_URL = env_str("LEARNDB_REDIS_URL", DEFAULT_REDIS_URL)
STORE_TIMEOUT_SECONDS = env_float(
    "LEARNDB_STORE_TIMEOUT_SECONDS",
    DEFAULT_STORE_TIMEOUT_SECONDS,
    minimum=0.1,
)

store = open_list_store(
    STORE_BACKEND,
    redis_url=REDIS_URL,
    timeout_seconds=STORE_TIMEOUT_SECONDS,
)
# One store call at a time; handlers hop to a worker thread for the blocking client.
store_lock = asyncio.Lock()

print(
    f"[CFG] store_backend={store.name} "
    f"redis_url={REDIS_URL if store.name == 'redis' else '-'} "
    f"timeout_s={STORE_TIMEOUT_SECONDS}"
)

# =========================
# CHANNELS + REPLIES
# =========================
ALLOWED_CHANNEL_IDS = resolve_allowed_channel_ids(DEFAULT_ALLOWED_CHANNEL_IDS)

_RAW_REPLY_TEMPLATES_PATH = os.getenv("LEARNDB_REPLY_TEMPLATES_PATH")
REPLY_TEMPLATES_PATH = os.getenv(
    "LEARNDB_REPLY_TEMPLATES_PATH",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "config", "reply_templates.yml"),
)
REPLY_TEMPLATES, REPLY_TEMPLATES_WARNING = load_reply_templates(REPLY_TEMPLATES_PATH)
REPLY_TEMPLATES_SOURCE = "env_override" if _RAW_REPLY_TEMPLATES_PATH is not None else "file"
if REPLY_TEMPLATES_WARNING:
    REPLY_TEMPLATES_SOURCE = "fallback"

print(
    f"[CFG] allowed_channels={len(ALLOWED_CHANNEL_IDS) or 'all'} "
    f"reply_templates={REPLY_TEMPLATES.version} "
    f"source={REPLY_TEMPLATES_SOURCE} path={REPLY_TEMPLATES_PATH}"
)
if REPLY_TEMPLATES_WARNING:
    print(f"[CFG] {REPLY_TEMPLATES_WARNING}")

# =========================
# DISCORD BOT
# =========================
intents = discord.Intents.default()
intents.message_content = True

bot = commands.Bot(command_prefix=COMMAND_PREFIX, intents=intents)

wire_bot_runtime(
    bot,
    allowed_channel_ids=ALLOWED_CHANNEL_IDS,
    store=store,
    store_lock=store_lock,
    store_backend=store.name,
    reply_templates=REPLY_TEMPLATES,
    send_chunked=send_chunked,
)

bot.run(DISCORD_TOKEN)
