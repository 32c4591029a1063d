from .csv_exporter import export_incidents_csv, incidents_to_frame
