# chip8_core_tracer/ui/register_view.py
"""
レジスタ値と診断ダンプを表示するウィジェット。
表示項目は AbstractCpu.get_register_layout() から組み立てます。
"""
from typing import Dict, Optional, Tuple

from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox, QPlainTextEdit
from PySide6.QtGui import QFontDatabase
from PySide6.QtCore import Qt

from chip8_core_tracer.core.cpu import AbstractCpu

VALUE_STYLE = "font-family: '{family}', monospace; color: #FFD700;"
DUMP_STYLE = "font-family: '{family}', monospace; color: #99FF99;"

# @intent:responsibility レジスタをグループ単位の4列グリッドで並べ、下部に inspect() の結果を表示します。
class RegisterView(QWidget):
    COLUMNS = 4

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")
        self._family = QFontDatabase.systemFont(QFontDatabase.FixedFont).family()
        self._cpu: Optional[AbstractCpu] = None
        # レジスタ名 -> (値ラベル, 16進桁数)
        self._cells: Dict[str, Tuple[QLabel, int]] = {}

        self._groups = QVBoxLayout()
        self._dump = QPlainTextEdit()
        self._dump.setReadOnly(True)
        self._dump.setStyleSheet(DUMP_STYLE.format(family=self._family))

        outer = QVBoxLayout(self)
        outer.setContentsMargins(4, 4, 4, 4)
        outer.addLayout(self._groups)
        outer.addWidget(self._dump)

    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._rebuild()

    def _rebuild(self) -> None:
        while self._groups.count():
            widget = self._groups.takeAt(0).widget()
            if widget is not None:
                widget.deleteLater()
        self._cells = {}

        for group in self._cpu.get_register_layout():
            box = QGroupBox(group.group_name)
            box.setStyleSheet("QGroupBox { font-weight: bold; color: #EEE; } QGroupBox::title { color: #00AAAA; }")
            grid = QGridLayout(box)
            grid.setSpacing(4)
            for index, reg in enumerate(group.registers):
                digits = (reg.width + 3) // 4
                value = QLabel("0x" + "0" * digits)
                value.setStyleSheet(VALUE_STYLE.format(family=self._family))
                value.setAlignment(Qt.AlignRight)
                row, col = divmod(index, self.COLUMNS)
                grid.addWidget(QLabel(reg.name), row, col * 2)
                grid.addWidget(value, row, col * 2 + 1)
                self._cells[reg.name] = (value, digits)
            self._groups.addWidget(box)

    def update_registers(self) -> None:
        if self._cpu is None:
            return
        for name, current in self._cpu.get_register_map().items():
            cell = self._cells.get(name)
            if cell is not None:
                label, digits = cell
                label.setText(f"0x{current:0{digits}X}")

    def label_text(self, name: str) -> str:
        return self._cells[name][0].text()

    def show_dump(self, text: str) -> None:
        self._dump.setPlainText(text)

    def dump_text(self) -> str:
        return self._dump.toPlainText()
