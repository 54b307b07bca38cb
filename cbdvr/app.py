import asyncio
import signal

from .compress import wait_for_compressions
from .config import get_env
from .recorder import ChannelRecorder
from .utils import log, disable_streamlink_log


async def run_app():
    env = get_env()
    log.is_prod = env.env == "prod"
    log.set_level(env.log_level)
    disable_streamlink_log()

    recorder = ChannelRecorder(env.record, env.req_conf)
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, recorder.stop)
        except NotImplementedError:
            # not supported on Windows event loops
            pass

    await recorder.run()
    await wait_for_compressions()


def main():
    asyncio.run(run_app())
