"""Display labels used by the queue summary and the bundled steps."""

from pydantic import BaseModel


class Labels(BaseModel):
    """User-facing strings. English by default; see russian() for a preset."""

    status_success: str = "SUCCESS"
    status_problem: str = "ISSUE"
    status_in_progress: str = "IN PROGRESS"
    status_cancelled: str = "CANCELLED"
    summary_completed: str = "Completed"
    summary_of: str = "of"
    summary_tasks: str = "tasks"

    step_done: str = "DONE"
    step_error: str = "ERROR"
    yes: str = "Yes"
    no: str = "No"
    declined_message: str = 'user selected "No"'
    input_placeholder: str = "..."
    timeout_message: str = "Operation took too long"
    select_all: str = "Select all"
    select_at_least_one: str = "! Select at least one item"

    choice_help: str = "[↑/↓ navigate, →/Enter select]"
    confirm_help: str = "[←/→ switch, Y/N answer, Enter confirm]"
    input_help: str = "[Enter to confirm, Ctrl+C to cancel]"
    multi_select_help: str = "[↑/↓ navigate, →/space toggle, Enter confirm]"
    multi_select_all_help: str = (
        "[↑/↓ navigate, →/space toggle/toggle all, Enter confirm]"
    )

    @classmethod
    def english(cls) -> "Labels":
        return cls()

    @classmethod
    def russian(cls) -> "Labels":
        return cls(
            status_success="УСПЕШНО",
            status_problem="ПРОБЛЕМА",
            status_in_progress="В ПРОЦЕССЕ",
            status_cancelled="ОТМЕНЕНО",
            summary_completed="Успешно завершено",
            summary_of="из",
            summary_tasks="задач",
            step_done="ГОТОВО",
            step_error="ОШИБКА",
            yes="Да",
            no="Нет",
            declined_message='пользователь выбрал "Нет"',
            timeout_message="Операция заняла слишком много времени",
            select_all="Выбрать все",
            select_at_least_one="! Необходимо выбрать хотя бы один элемент",
            choice_help="[↑/↓ навигация, →/Enter выбор]",
            confirm_help="[←/→ переключение, Y/N ответ, Enter подтвердить]",
            input_help="[Enter подтвердить, Ctrl+C отмена]",
            multi_select_help="[↑/↓ навигация, →/пробел выбор, Enter подтверждение]",
            multi_select_all_help=(
                "[↑/↓ навигация, →/пробел выбор/переключение всех, "
                "Enter подтверждение]"
            ),
        )

    @classmethod
    def for_language(cls, language: str) -> "Labels":
        """Return the preset for a language code, falling back to English."""
        if language.lower().startswith("ru"):
            return cls.russian()
        return cls.english()


DEFAULT_LABELS = Labels()
