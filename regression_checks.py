from calculator_cli import render
from calculator_engine import AngleMode, format_number
from calculator_state import Calculator
import sys


def _walk(sequence: str, *, angle_mode: AngleMode = AngleMode.RADIANS):
	calculator = Calculator(angle_mode=angle_mode)
	states = []

	for label in sequence.split():
		calculator.press(label)
		states.append(render(calculator.snapshot()))

	return calculator.state, states


def inspect_sequence(sequence: str, *, degrees: bool = False) -> None:
	"""Imprime la pantalla después de cada pulsación."""
	mode = AngleMode.DEGREES if degrees else AngleMode.RADIANS
	state, states = _walk(sequence, angle_mode=mode)

	print("Sequence inspection")
	print(f"buttons:        {sequence}")
	print(f"angle mode:     {mode.label}")
	print(f"total presses:  {len(states)}")
	print("states:")
	for i, (label, text) in enumerate(zip(sequence.split(), states), start=1):
		print(f"  {i}. {label:>6}  {text}")

	print(f"final expr:     {state.expression}")
	print(f"memory:         {state.memory}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	state, _ = _walk("5 + 3 =")
	checks.append(("5+3 displays 8", state.display == "8"))
	checks.append(("5+3 keeps evaluated expression", state.last_expression == "5+3"))

	state, _ = _walk(".")
	checks.append(("dot from reset becomes 0.", state.expression == "0."))
	state, _ = _walk("7 . . 5")
	checks.append(("repeated dot is ignored", state.expression == "7.5"))

	state, _ = _walk("1 / 0 =")
	checks.append(("1/0 reports calculation error", state.error == "calculation error"))
	checks.append(("1/0 keeps expression", state.expression == "1/0"))
	state, _ = _walk("1 / 0 = <-")
	checks.append(("editing clears the error", state.error is None))

	state, _ = _walk("sin 9 0 ) =", angle_mode=AngleMode.DEGREES)
	expected_actual.append(("sin(90) DEG", "1", state.display))
	state, _ = _walk("sin 9 0 ) =")
	expected_actual.append(("sin(90) RAD", "0.893996663601", state.display))

	state, _ = _walk("5 0 %")
	expected_actual.append(("50 %", "0.5", state.display))

	state, _ = _walk("4 x^2 =")
	expected_actual.append(("(4)^2", "16", state.display))
	state, _ = _walk("5 ! =")
	expected_actual.append(("5!", "120", state.display))
	state, _ = _walk("2 ^ 1 0 0 =")
	expected_actual.append(("2^100", "1.26765060e30", state.display))

	state, _ = _walk("1 2 M+ M-")
	checks.append(("M+ then M- restores memory", state.memory == 0))
	state, _ = _walk("1 2 M+ AC MR")
	checks.append(("MR types the memory value", state.expression == "12"))
	state, _ = _walk("1 + M+")
	checks.append(("failed M+ leaves memory", state.memory == 0 and state.error == "memory failed"))

	for value in (0.1 + 0.2, 1e10, 1e-7, 2 / 3, -123.456):
		text = format_number(value)
		checks.append((f"format({value!r}) is idempotent", format_number(float(text)) == text))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		if status == "FAIL":
			failed.append(label)
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "5 + 3 ="
	#   python regression_checks.py --inspect "sin 9 0 ) =" --deg
	if "--inspect" in sys.argv:
		try:
			sequence = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing button sequence after --inspect")

		inspect_sequence(sequence, degrees="--deg" in sys.argv)
	else:
		run_regressions()
