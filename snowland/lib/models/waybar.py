from pydantic import BaseModel, ConfigDict, Field


class WaybarStatus(BaseModel):
	"""
	The JSON object a Waybar ``custom`` module reads from a script's stdout.
	``class`` is a Python keyword, hence the alias.
	"""
	model_config = ConfigDict(populate_by_name=True)

	text: str
	tooltip: str
	class_: str | None = Field(default=None, alias='class')

	def render(self) -> str:
		return self.model_dump_json(by_alias=True, exclude_none=True)
