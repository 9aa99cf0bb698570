# NOTE: For displaying the bitmap in a GUI,
#       please download PyQt5.
#
# Installation (in terminal):
#   pip install PyQt5
import logging
import sys
from PyQt5.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QPushButton, QLabel,
    QFileDialog, QTextEdit, QSlider, QHBoxLayout, QMessageBox
)
from PyQt5.QtGui import QPixmap, QImage, qRgb
from PyQt5.QtCore import Qt

import draw
from bmp_errors import BMPError, BMPIOError
from bmp_image import RGB, BMPImage

logger = logging.getLogger(__name__)


class BMPViewer(QWidget):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("BMP Viewer")
        self.resize(700, 500)

        # Currently opened image
        self.image = None
        self.scale = 1.0

        layout = QVBoxLayout()

        top_layout = QHBoxLayout()

        # Button to open BMP file
        self.open_button = QPushButton("Open BMP File")
        self.open_button.setFixedSize(150, 50)
        self.open_button.clicked.connect(self.open_file)
        top_layout.addWidget(self.open_button)

        # Button to draw both diagonals in white
        self.diagonals_button = QPushButton("Draw Diagonals")
        self.diagonals_button.setFixedSize(150, 50)
        self.diagonals_button.clicked.connect(self.draw_diagonals)
        top_layout.addWidget(self.diagonals_button)

        # Button to save the (possibly edited) BMP file
        self.save_button = QPushButton("Save BMP File")
        self.save_button.setFixedSize(150, 50)
        self.save_button.clicked.connect(self.save_file)
        top_layout.addWidget(self.save_button)

        top_layout.addStretch()
        layout.addLayout(top_layout)

        # Label to display the image
        self.image_label = QLabel("No Image Loaded")
        self.image_label.setStyleSheet("border: 1px solid black; background: white;")
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setFixedSize(700, 400)
        layout.addWidget(self.image_label)

        # Text box to display BMP header fields
        self.metadata_box = QTextEdit("No Metadata Loaded")
        self.metadata_box.setMinimumHeight(150)
        self.metadata_box.setReadOnly(True)
        layout.addWidget(self.metadata_box)

        # Slider for scaling the image
        self.scale_slider = QSlider(Qt.Horizontal)
        self.scale_slider.setRange(1, 100)
        self.scale_slider.setValue(100)
        self.scale_slider.valueChanged.connect(self.update_image)
        layout.addWidget(QLabel("Scale"))
        layout.addWidget(self.scale_slider)

        self.setLayout(layout)

    # Open BMP file and show it
    def open_file(self):
        filepath, _ = QFileDialog.getOpenFileName(self, "Open BMP File", "", "BMP Files (*.bmp)")
        if not filepath:
            return

        try:
            self.image = BMPImage.load(filepath)
        except BMPIOError as e:
            logger.warning("Could not read %s: %s", filepath, e)
            QMessageBox.warning(self, "BMP Viewer", f"Could not read file:\n{e}")
            return
        except BMPError as e:
            logger.warning("Rejected %s: %s", filepath, e)
            QMessageBox.warning(self, "BMP Viewer", f"Not a supported bitmap:\n{e}")
            return

        # Display metadata
        meta_text = ""
        meta_text += f"file_size: {self.image.file_header.size}\n"
        meta_text += f"data_offset: {self.image.file_header.offset}\n"
        for k, v in self.image.info_header.metadata().items():
            meta_text += f"{k}: {v}\n"
        meta_text += f"row_padding: {self.image.row_pad}\n"
        self.metadata_box.setText(meta_text)

        self.update_image()

    # Redraw the label from the current raster and scale
    def update_image(self):
        if self.image is None:
            return

        self.scale = self.scale_slider.value() / 100.0
        width, height = self.image.dimension()

        new_w = int(width * self.scale)
        new_h = int(height * self.scale)

        qimage = QImage(new_w, new_h, QImage.Format_RGB32)

        for y in range(new_h):
            for x in range(new_w):
                src_x = int(x / self.scale)
                # Stored rows run bottom-to-top
                src_y = height - 1 - int(y / self.scale)

                R, G, B = self.image.pixel(src_x, src_y)
                qimage.setPixel(x, y, qRgb(R, G, B))

        # Show updated image
        pixmap = QPixmap.fromImage(qimage)
        self.image_label.setPixmap(pixmap)

    def draw_diagonals(self):
        if self.image is None:
            return

        try:
            draw.diagonals(self.image, RGB.splat(255))
        except BMPError as e:
            QMessageBox.warning(self, "BMP Viewer", str(e))
        self.update_image()

    def save_file(self):
        if self.image is None:
            return

        output_filepath, _ = QFileDialog.getSaveFileName(self, "Save BMP File", "", "BMP Files (*.bmp)")
        if not output_filepath:
            return

        try:
            self.image.save(output_filepath)
        except BMPIOError as e:
            logger.warning("Could not write %s: %s", output_filepath, e)
            QMessageBox.warning(self, "BMP Viewer", f"Could not write file:\n{e}")
            return
        logger.info("Saved %s", output_filepath)
        self.metadata_box.append(f"Saved to {output_filepath}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = QApplication(sys.argv)
    viewer = BMPViewer()
    viewer.show()
    sys.exit(app.exec_())
