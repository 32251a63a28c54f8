"""storeops package.

Back-office reporting for a small shop: attendance hours, sales totals and
payroll summaries. Organized by feature modules (attendance, sales, users,
payroll, reporting) with a thin Flask JSON layer over service/repository layers.
"""
