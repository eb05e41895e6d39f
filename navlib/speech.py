"""
Speech output for menu announcements
"""

import logging
import queue
import threading
import time

from navlib.model import Priority
from navlib.utils import LOGGER_NAME, strip_markup

logger = logging.getLogger(LOGGER_NAME)


def sanitize_speech_text(text, max_length=0):
    """
    Sanitize text for the screen reader

    Markup is removed and whitespace is collapsed on each line; line breaks
    are kept so announcements read as separate phrases.

    Args:
        text: Raw text string
        max_length: Truncate longer text (0 = no limit)

    Returns:
        str: Sanitized text
    """
    if not text:
        return ""

    text = strip_markup(text)
    text = text.replace("\t", " ").replace("\r", "")

    lines = []
    for line in text.split("\n"):
        line = " ".join(line.split())
        if line:
            lines.append(line)
    text = "\n".join(lines)

    if max_length and len(text) > max_length:
        text = text[:max_length] + "..."

    return text


class LogSpeaker:
    """Speech sink that writes announcements to the log instead of speaking"""

    def __init__(self, max_length=0):
        self.max_length = max_length

    def speak(self, text, priority=Priority.NORMAL):
        message = sanitize_speech_text(text, self.max_length)
        if message:
            logger.info(f"SPEECH ({priority.value}): {message}")


class AccessibleOutputSpeaker:
    """
    Speech sink backed by accessible_output2.

    speak() only queues the message; a worker thread feeds the screen reader
    so navigation never waits on speech.
    """

    def __init__(self, max_length=0, interrupt_normal=False):
        """
        Initialize the speaker

        Args:
            max_length: Truncate longer messages (0 = no limit)
            interrupt_normal: Interrupt current speech for normal messages too
        """
        self.max_length = max_length
        self.interrupt_normal = interrupt_normal
        self.speaker = None
        self.speech_queue = queue.Queue()
        self.stop_requested = threading.Event()
        self.worker_thread = None
        self.last_speech_time = time.time()

    def _create_output(self):
        import accessible_output2.outputs.auto as ao
        return ao.Auto()

    def start(self):
        """Initialize the speech engine and start the worker thread"""
        self.stop_requested.clear()
        try:
            self.speaker = self._create_output()
            logger.info("Speech system initialized")
        except Exception as e:
            logger.error(f"Failed to initialize speech engine: {e}")

        self.worker_thread = threading.Thread(target=self._speech_thread_worker, daemon=True)
        self.worker_thread.start()

    def shutdown(self):
        """Stop the worker thread"""
        self.stop_requested.set()
        if self.worker_thread is not None:
            self.worker_thread.join(timeout=1.0)
            self.worker_thread = None

    def speak(self, text, priority=Priority.NORMAL):
        """
        Queue a message to be spoken (non-blocking)

        Args:
            text: Text to speak
            priority: Priority.HIGH drops pending messages and interrupts
        """
        message = sanitize_speech_text(text, self.max_length)
        if not message:
            return

        interrupt = priority == Priority.HIGH or self.interrupt_normal
        if priority == Priority.HIGH:
            self._clear_queue()

        self.speech_queue.put((message, interrupt))

    def _clear_queue(self):
        while not self.speech_queue.empty():
            try:
                self.speech_queue.get_nowait()
                self.speech_queue.task_done()
            except queue.Empty:
                break

    def _speech_thread_worker(self):
        """Background thread that processes the speech queue"""
        last_reinit_time = 0
        reinit_cooldown = 10  # Seconds between reinitializations

        while not self.stop_requested.is_set():
            try:
                message, interrupt = self.speech_queue.get(timeout=0.1)
            except queue.Empty:
                continue

            try:
                if self.speaker is None:
                    self.speaker = self._create_output()
                    logger.info("Speech engine initialized")

                # Limit rate of announcements
                if not interrupt and time.time() - self.last_speech_time < 0.1:
                    time.sleep(0.1)

                self.speaker.speak(message, interrupt=interrupt)
                self.last_speech_time = time.time()
            except Exception as speech_error:
                logger.error(f"Speech error: {speech_error}")

                # Try to reinitialize the speech engine after cooldown
                current_time = time.time()
                if current_time - last_reinit_time > reinit_cooldown:
                    last_reinit_time = current_time
                    try:
                        self.speaker = self._create_output()
                        logger.info("Reinitialized speech engine")
                    except Exception as reinit_error:
                        logger.error(f"Failed to reinitialize speech engine: {reinit_error}")
                        self.speaker = None
            finally:
                self.speech_queue.task_done()
