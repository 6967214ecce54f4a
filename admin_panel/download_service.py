import csv
import logging

from django.http import HttpResponse
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.platypus import (
    BaseDocTemplate, Frame, PageTemplate,
    Paragraph, Table, TableStyle, Spacer
)
from reportlab.lib.styles import getSampleStyleSheet

from wallet.services import format_currency

logger = logging.getLogger(__name__)


TABLE_STYLE = TableStyle([
    ('BACKGROUND',   (0, 0), (-1, 0), colors.grey),
    ('TEXTCOLOR',    (0, 0), (-1, 0), colors.whitesmoke),
    ('ALIGN',        (0, 0), (-1, -1), 'CENTER'),
    ('FONTNAME',     (0, 0), (-1, 0), 'Times-Bold'),
    ('BOTTOMPADDING', (0, 0), (-1, 0), 12),
    ('GRID',         (0, 0), (-1, -1), 1, colors.black),
])

KYC_LABELS = {
    'pending_review': 'Pending Review',
    'approved': 'Approved',
    'rejected': 'Rejected',
}


def _filename(report, extension):
    return f"belfx_report_{report['generated_at'].strftime('%Y%m%d')}.{extension}"


class DownloadService:

    @staticmethod
    def report_csv(report):
        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = f'attachment; filename="{_filename(report, "csv")}"'

        writer = csv.writer(response)
        writer.writerow(['User signups'])
        writer.writerow(['Month', 'Signups'])
        for row in report['signups']:
            writer.writerow([row['month'], row['count']])

        writer.writerow([])
        writer.writerow(['Completed transaction volume'])
        writer.writerow(['Month'] + list(report['currencies']))
        for row in report['volume']:
            writer.writerow([row['month']] + [f"{total:.2f}" for total in row['totals']])

        writer.writerow([])
        writer.writerow(['KYC requests'])
        writer.writerow(['Status', 'Count'])
        for status, count in report['kyc_counts'].items():
            writer.writerow([KYC_LABELS.get(status, status), count])

        return response

    @staticmethod
    def report_pdf(report):
        response = HttpResponse(content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="{_filename(report, "pdf")}"'

        doc = BaseDocTemplate(
            response,
            pagesize=letter,
            leftMargin=36, rightMargin=36,
            topMargin=72, bottomMargin=36
        )
        frame = Frame(
            doc.leftMargin, doc.bottomMargin,
            doc.width, doc.height,
            id='normal'
        )

        generated = report['generated_at'].strftime("%Y-%m-%d %H:%M")

        def draw_header(canvas, doc):
            canvas.saveState()
            canvas.setFont('Times-Bold', 16)
            canvas.drawCentredString(letter[0]/2, letter[1]-40, "BELFX Platform Report")
            canvas.setFont('Times-Roman', 10)
            canvas.drawCentredString(letter[0]/2, letter[1]-58, f"Generated {generated}")
            canvas.restoreState()

        doc.addPageTemplates([
            PageTemplate(id='WithHeader', frames=frame, onPage=draw_header)
        ])

        styles = getSampleStyleSheet()

        signups = [['Month', 'Signups']]
        signups += [[row['month'], str(row['count'])] for row in report['signups']]

        # Base-14 fonts have no naira glyph
        volume = [['Month'] + list(report['currencies'])]
        for row in report['volume']:
            volume.append([row['month']] + [
                format_currency(total, code).replace('₦', 'NGN ')
                for total, code in zip(row['totals'], report['currencies'])
            ])

        kyc = [['Status', 'Count']]
        kyc += [[KYC_LABELS.get(status, status), str(count)]
                for status, count in report['kyc_counts'].items()]

        story = [Spacer(1, 20)]
        for title, data in (
            ('User signups', signups),
            ('Completed transaction volume', volume),
            ('KYC requests', kyc),
        ):
            table = Table(data, repeatRows=1)
            table.setStyle(TABLE_STYLE)
            story += [Paragraph(title, styles['Heading2']), table, Spacer(1, 16)]

        doc.build(story)
        logger.info(f"Admin report PDF generated at {generated}")
        return response
