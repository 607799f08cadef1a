import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .exceptions import InstallStepError
from .models.state import RunMode
from .output import heading, logger, prompt_label, warn


@dataclass(frozen=True)
class Step:
	"""
	One optional part of the installation.

	The first run always performs steps marked ``always_on_first_run``
	without asking. Every other step is prompted, defaulting to yes on a
	first run and to no on later runs.
	"""
	name: str
	description: list[str]
	action: Callable[[], Any]
	first_run_prompt: str
	update_prompt: str
	skip_message: str
	always_on_first_run: bool = False

	def prompt(self, mode: RunMode) -> str:
		hint = '[Y/n]' if mode.default_answer else '[y/N]'
		question = self.first_run_prompt if mode == RunMode.FIRST_RUN else self.update_prompt
		return f'{question} {hint}: '


def ask_yes_no(question: str, default: bool, read: Callable[[str], str] = input) -> bool:
	"""
	An empty answer (or end of input) takes the default, ``y``/``Y`` means
	yes and anything else means no.
	"""
	try:
		answer = read(f'{prompt_label()} {question}').strip()
	except EOFError:
		answer = ''

	logger.log(logging.INFO, f'{question}{answer}')

	if not answer:
		return default

	return answer in ('y', 'Y')


@dataclass
class StepOutcome:
	ran: list[str] = field(default_factory=list)
	skipped: list[str] = field(default_factory=list)


def _perform(step: Step, outcome: StepOutcome) -> None:
	try:
		step.action()
	except Exception as err:
		raise InstallStepError(step.name, err) from err

	outcome.ran.append(step.name)


def run_steps(
	steps: list[Step],
	mode: RunMode,
	read: Callable[[str], str] = input,
) -> StepOutcome:
	outcome = StepOutcome()

	for step in steps:
		if mode == RunMode.FIRST_RUN and step.always_on_first_run:
			_perform(step, outcome)
			continue

		print()
		heading(f'{step.name}:', fg='white')
		for line in step.description:
			print(line)

		if ask_yes_no(step.prompt(mode), mode.default_answer, read):
			_perform(step, outcome)
		else:
			warn(step.skip_message)
			outcome.skipped.append(step.name)

	return outcome
